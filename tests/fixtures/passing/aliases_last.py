"""Fixture: every alias import follows the plain imports of its scope."""

import os
import sys
from pathlib import Path

import numpy as np


def load(path):
    """Load a file relative to the working directory."""
    import json
    import yaml as pyyaml

    return json.loads(Path(os.getcwd(), path).read_text()), pyyaml, np, sys
