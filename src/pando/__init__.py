"""
Pando language tooling: static analyzer, language server and toolchain driver.
"""

__version__ = "0.1.0"
