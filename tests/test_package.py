import tomllib
from pathlib import Path
import pytest
import snip
from snip.cli import main

def test_version_matches_pyproject():
    meta = tomllib.loads((Path(__file__).parents[1] / "pyproject.toml").read_text(encoding="utf-8"))
    assert snip.__version__ == meta["project"]["version"]

def test_cli_version_flag(capsys):
    with pytest.raises(SystemExit) as ei:
        main(["--version"])
    assert ei.value.code == 0
    assert capsys.readouterr().out.strip() == snip.__version__
