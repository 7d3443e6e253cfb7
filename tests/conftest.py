import textwrap
from pathlib import Path

import pytest

from tests.infrastructure.file_utils import write, write_config


@pytest.fixture
def tmpproj(tmp_path: Path):
    """Minimal project: templar.yaml plus a main template with one include."""
    root = tmp_path
    write(
        root / "templates" / "main.tpl",
        textwrap.dedent("""
        Report
        !!% if audience == "internal"
        Internal notes.
        %!!
        !!% ifelse draft == "yes"
        DRAFT
        !!% else
        %!!
        FINAL
        %!!
        !!% transform body: body | upper
        !!% include parts/footer.tpl
        %!!
        %!!
        """).lstrip(),
    )
    write(root / "templates" / "parts" / "footer.tpl", "end of report\n")
    write_config(root, {
        "template": "templates/main.tpl",
        "output": "out/report.txt",
        "variables": {"audience": "internal", "draft": "no"},
    })
    return root
