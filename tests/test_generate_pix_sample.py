import importlib.util
from pathlib import Path

import pytest


@pytest.fixture
def sample_script():
    path = Path(__file__).resolve().parent.parent / "scripts" / "generate_pix_sample.py"
    spec = importlib.util.spec_from_file_location("generate_pix_sample", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_sample_uses_a_person_document_key(sample_script, mocker, tmp_path, capsys):
    """The sample payment shows a real CPF key, formatted for display"""
    mocker.patch.object(sample_script, "project_path", tmp_path)

    assert sample_script.main() == 0

    output = capsys.readouterr().out
    assert "Key: 123.456.789-01 (CPF)" in output
    assert "011112345678901" in output
    assert (tmp_path / "sample_pix_payment.pdf").read_bytes().startswith(b"%PDF")
