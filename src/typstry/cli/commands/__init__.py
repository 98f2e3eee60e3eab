# topmark:header:start
#
#   project      : Typstry
#   file         : __init__.py
#   file_relpath : src/typstry/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Typstry CLI subcommands."""
