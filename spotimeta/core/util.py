import sys


def warn(msg: str) -> None:
    """
    Non-fatal diagnostic for the operator. Never touches stdout.
    """
    print(f"warning: {msg}", file=sys.stderr)
