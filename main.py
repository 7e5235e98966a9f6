"""
main.py — CLI entry point for development use.

For normal use, install with `pip install -e .` and run:
    class-planner generate --catalog data/sample_catalog.json --plan data/sample_plan.json

sys.path manipulation here is a fallback so that running `python main.py ...`
works without a prior editable install.
"""
import sys
from pathlib import Path

_src = Path(__file__).parent / "src"
if str(_src) not in sys.path:
    sys.path.insert(0, str(_src))

from class_planner.cli import main  # noqa: E402

if __name__ == "__main__":
    main()
