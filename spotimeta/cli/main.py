# spotimeta/cli/main.py

import sys

from spotimeta.core import fetch


HELP = """spotimeta — read MPRIS metadata from Spotify

Usage:
  spotimeta            dump every metadata entry
  spotimeta dump       same as above
  spotimeta track      print "artist - title"
"""


# ------------------------------------------------------------
# Entry
# ------------------------------------------------------------

def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv

    if not argv:
        dump_cmd()
        return

    if argv[0] in ("-h", "--help", "help"):
        print(HELP)
        return

    dispatch_command(argv[0])


def dispatch_command(cmd: str) -> None:
    if cmd == "dump":
        dump_cmd()
        return

    if cmd == "track":
        track_cmd()
        return

    print(f"Unknown command: {cmd}", file=sys.stderr)
    sys.exit(1)


# ------------------------------------------------------------
# Utilities
# ------------------------------------------------------------

def load_store():
    """
    Connect and fetch. Exits 1 on bus, peer or reply errors.
    """
    try:
        con = fetch.connect()
        return fetch.fetch_metadata(con)
    except fetch.RemoteCallError as e:
        if e.peer_missing:
            print("ERROR: is Spotify running?", file=sys.stderr)
        else:
            print(f"ERROR: {e.message}", file=sys.stderr)
        sys.exit(1)
    except fetch.MalformedReplyError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)


# ------------------------------------------------------------
# Commands
# ------------------------------------------------------------

def dump_cmd() -> None:
    with load_store() as store:
        for line in store.dump():
            print(line)


def track_cmd() -> None:
    with load_store() as store:
        line = fetch.track_line(store)

    if line is None:
        print("ERROR: could not read metadata", file=sys.stderr)
        sys.exit(1)

    print(line)


if __name__ == "__main__":
    main()
