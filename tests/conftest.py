"""
Pytest configuration for Pando tests.
"""
import sys
import os

import pytest

# Make `import pando` work without installing the package
_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
_SRC_DIR = os.path.join(_ROOT, 'src')

if _SRC_DIR not in sys.path:
	sys.path.insert(0, _SRC_DIR)


SAMPLE_PROGRAM = """\
# sample Pando program
count: int = 1
ratio: double = 2.5
name: str = "pando"
flag: bool = True
big: int64 = count
print(count)
"""


@pytest.fixture
def sample_program():
	return SAMPLE_PROGRAM
