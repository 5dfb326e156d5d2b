"""
Lets `python -m brainrot` do what the `brainrot` console script does.
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from brainrot.cmdline import main

main()
