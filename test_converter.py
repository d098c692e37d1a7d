#!/usr/bin/env python3
"""
Tests for the converter facade and its configuration.

Run with: uv run pytest test_converter.py
"""
import json
import logging
import sys
import os
import threading
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import pytest

from document import InvalidCellTypeError, NotebookParseError, NotebookReadError, parse_notebook
from services import ConverterConfig, NotebookConverter, convert, load_config

SAMPLE_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)),
                           "test_data", "sample_notebook.ipynb")


def create_sample_notebook() -> str:
    return json.dumps({
        "cells": [
            {"cell_type": "markdown", "metadata": {}, "source": ["# Test Notebook"]},
            {
                "cell_type": "code",
                "execution_count": 1,
                "metadata": {},
                "outputs": [
                    {"name": "stdout", "output_type": "stream", "text": ["Hello from test"]},
                ],
                "source": ['print("Hello from test")'],
            },
        ],
        "metadata": {
            "kernelspec": {"display_name": "Python 3", "language": "python", "name": "python3"},
        },
        "nbformat": 4,
        "nbformat_minor": 4,
    })


def create_invalid_cell_notebook() -> str:
    return json.dumps({
        "cells": [
            {"cell_type": "markdown", "metadata": {}, "source": ["ok"]},
            {"cell_type": "invalid_type", "metadata": {}, "source": ["test"]},
        ],
        "metadata": {},
        "nbformat": 4,
        "nbformat_minor": 4,
    })


# ============================================================================
# Configuration
# ============================================================================

def test_converter_defaults():
    converter = NotebookConverter()
    assert not converter.include_outputs
    assert not converter.include_metadata


def test_converter_with_options():
    converter = NotebookConverter().with_outputs(True).with_metadata(True)
    assert converter.include_outputs
    assert converter.include_metadata
    assert converter.config == ConverterConfig.llm_ready()


def test_with_options_returns_new_converter():
    base = NotebookConverter()
    derived = base.with_outputs(True)
    assert derived is not base
    assert not base.include_outputs


def test_config_merge_only_turns_switches_on():
    config = ConverterConfig(include_outputs=True)
    assert config.merged() == config
    assert config.merged(include_metadata=True) == ConverterConfig.llm_ready()
    assert ConverterConfig().merged(llm_ready=True) == ConverterConfig.llm_ready()


def test_load_config_missing_file_uses_defaults(tmp_path, caplog):
    with caplog.at_level(logging.WARNING):
        assert load_config(tmp_path / "jupyter2llm_config.json") == ConverterConfig()
    assert "does not exist" in caplog.text


def test_load_config_implicit_file_is_silent(tmp_path, monkeypatch, caplog):
    monkeypatch.chdir(tmp_path)
    with caplog.at_level(logging.WARNING):
        assert load_config() == ConverterConfig()
    assert caplog.text == ""


def test_load_config_reads_switches(tmp_path):
    path = tmp_path / "jupyter2llm_config.json"
    path.write_text(json.dumps({"include_outputs": True}), encoding="utf-8")
    assert load_config(path) == ConverterConfig(include_outputs=True, include_metadata=False)


def test_load_config_invalid_json_falls_back(tmp_path, caplog):
    path = tmp_path / "jupyter2llm_config.json"
    path.write_text("{not json", encoding="utf-8")
    with caplog.at_level(logging.ERROR):
        assert load_config(path) == ConverterConfig()
    assert "Failed to parse" in caplog.text


def test_load_config_ignores_non_boolean_values(tmp_path):
    path = tmp_path / "jupyter2llm_config.json"
    path.write_text(json.dumps({"include_outputs": "yes", "include_metadata": True}),
                    encoding="utf-8")
    assert load_config(path) == ConverterConfig(include_outputs=False, include_metadata=True)


# ============================================================================
# Conversion
# ============================================================================

def test_basic_conversion():
    result = NotebookConverter().convert_str(create_sample_notebook())
    assert "Test Notebook" in result
    assert 'print("Hello from test")' in result
    assert "Cell 1: Markdown" in result
    assert "Cell 2: Code" in result
    assert "Outputs" not in result


def test_conversion_with_outputs():
    result = NotebookConverter().with_outputs(True).convert_str(create_sample_notebook())
    assert "### Outputs" in result
    assert "```\nHello from test\n```" in result


def test_conversion_with_metadata():
    result = NotebookConverter().with_metadata(True).convert_str(create_sample_notebook())
    assert "Jupyter Notebook" in result
    assert "**Kernel: python3**" in result
    assert "**Display Name: Python 3**" in result
    assert "Total Cells: 2" in result


def test_convert_accepts_text_or_notebook():
    raw = create_sample_notebook()
    converter = NotebookConverter(ConverterConfig.llm_ready())
    assert converter.convert(raw) == converter.convert(parse_notebook(raw))
    assert converter.convert(raw.encode("utf-8")) == converter.convert(raw)


def test_module_level_convert():
    raw = create_sample_notebook()
    assert convert(raw) == NotebookConverter().convert_str(raw)


def test_invalid_json():
    with pytest.raises(NotebookParseError):
        NotebookConverter().convert_str("invalid json")


def test_invalid_cell_type():
    with pytest.raises(InvalidCellTypeError) as exc_info:
        NotebookConverter().convert_str(create_invalid_cell_notebook())
    assert exc_info.value.cell_type == "invalid_type"


def test_empty_notebook_with_metadata():
    raw = json.dumps({"cells": [], "metadata": {}, "nbformat": 4, "nbformat_minor": 4})
    result = NotebookConverter().with_metadata(True).convert_str(raw)
    assert "Total Cells: 0" in result


def test_file_conversion(tmp_path):
    path = tmp_path / "notebook.ipynb"
    path.write_text(create_sample_notebook(), encoding="utf-8")
    result = NotebookConverter().convert_file(path)
    assert "Test Notebook" in result
    assert "Cell 1: Markdown" in result


def test_real_file_conversion():
    result = NotebookConverter(ConverterConfig.llm_ready()).convert_file(SAMPLE_PATH)
    assert "Sample Jupyter Notebook" in result
    assert 'print("Hello, World!")' in result
    assert "calculate_answer()" in result
    assert "## Cell 5: Raw" in result
    assert "**Result**:\n```\n42\n```\n" in result
    assert "ZeroDivisionError: division by zero" in result
    assert "**Version: 3.11.4**" in result


def test_missing_file_raises_read_error(tmp_path):
    with pytest.raises(NotebookReadError):
        NotebookConverter().convert_file(tmp_path / "nope.ipynb")


def test_concurrent_conversions_agree():
    raw = create_sample_notebook()
    converter = NotebookConverter(ConverterConfig.llm_ready())
    expected = converter.convert(raw)
    results = []

    def worker():
        results.append(converter.convert(raw))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert results == [expected] * 8


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
