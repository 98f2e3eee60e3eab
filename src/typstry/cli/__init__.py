# topmark:header:start
#
#   project      : Typstry
#   file         : __init__.py
#   file_relpath : src/typstry/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Typstry command-line interface.

Public modules:
    - typstry.cli.main
"""
