"""Allow ``python -m json_tree_nav``."""

from json_tree_nav.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
