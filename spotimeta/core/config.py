# spotimeta/core/config.py

# ------------------------------------------------------------
# MPRIS / D-Bus addressing
# ------------------------------------------------------------

MPRIS_PREFIX = "org.mpris.MediaPlayer2"
OBJ_PATH = "/org/mpris/MediaPlayer2"
PLAYER_IFACE = MPRIS_PREFIX + ".Player"
PROPERTIES_IFACE = "org.freedesktop.DBus.Properties"
METADATA_PROP = "Metadata"

DEFAULT_PLAYER = "spotify"

# -1 lets GDBus apply its own default
CALL_TIMEOUT_MS = -1

# ------------------------------------------------------------
# Store
# ------------------------------------------------------------

STORE_CAPACITY = 100


def bus_name(player: str = DEFAULT_PLAYER) -> str:
    return f"{MPRIS_PREFIX}.{player}"
