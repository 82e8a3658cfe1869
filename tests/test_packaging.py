from pathlib import Path

PYPROJECT = Path(__file__).resolve().parent.parent / "pyproject.toml"


def lines():
    return PYPROJECT.read_text(encoding="utf-8").splitlines()


def test_declares_runtime_dependencies():
    text = "\n".join(lines())
    for name in ("streamlit", "pandas", "requests", "python-dotenv"):
        assert f'"{name}' in text


def test_no_readme_points_at_internal_docs():
    assert not [line for line in lines() if line.strip().startswith("readme")]
