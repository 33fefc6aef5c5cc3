#!/usr/bin/env python3
"""Run the scheduling algorithms selected in a config file (default: config.yaml)."""

import sys

from schedlab.main import cli

if __name__ == "__main__":
    cli(sys.argv[1:] or ["--config", "config.yaml"])
