# topmark:header:start
#
#   project      : Typstry
#   file         : __main__.py
#   file_relpath : src/typstry/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Allow ``python -m typstry``."""

from typstry.cli.main import cli

if __name__ == "__main__":
    cli(prog_name="typstry")
