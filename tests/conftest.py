import os
import sys
from pathlib import Path

# Headless matplotlib for visualization tests.
os.environ.setdefault("MPLBACKEND", "Agg")

# Ensure project root is on sys.path so `crucible_routing`, `experiments` and `main` import.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
