"""
MPRIS metadata fetch.

- Opens the session bus through pydbus
- Issues one blocking org.freedesktop.DBus.Properties.Get for Metadata
- Decodes the a{sv} reply into a Store

gi / pydbus are imported inside the functions that talk to the bus, so the
decoding side stays importable without them.
"""

from __future__ import annotations

from typing import Iterator, Optional, Tuple

from spotimeta.core import config
from spotimeta.core.decode import decode
from spotimeta.core.store import Store
from spotimeta.core.tagged import Kind, Tagged, from_variant
from spotimeta.core.util import warn

SERVICE_UNKNOWN = "org.freedesktop.DBus.Error.ServiceUnknown"


# ------------------------------------------------------------
# Errors
# ------------------------------------------------------------

class MetadataError(Exception):
    pass


class RemoteCallError(MetadataError):
    """
    Bus unreachable, peer missing, or the remote call failed.
    """

    def __init__(self, message: str, name: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.name = name

    @property
    def peer_missing(self) -> bool:
        return self.name == SERVICE_UNKNOWN


class MalformedReplyError(MetadataError):
    pass


def _remote_call_error(err) -> RemoteCallError:
    from gi.repository import Gio

    name = Gio.DBusError.get_remote_error(err)
    message = err.message or ""
    prefix = f"GDBus.Error:{name}: "
    if name and message.startswith(prefix):
        message = message[len(prefix):]
    return RemoteCallError(message, name=name)


# ------------------------------------------------------------
# Bus plumbing
# ------------------------------------------------------------

def connect():
    """
    Session bus connection (Gio.DBusConnection) via pydbus.
    """
    from gi.repository import GLib
    from pydbus import SessionBus

    try:
        return SessionBus().con
    except GLib.Error as e:
        raise _remote_call_error(e) from e


def get_property(con, bus_name: str, prop: str = config.METADATA_PROP,
                 interface: str = config.PLAYER_IFACE):
    """
    Blocking Properties.Get. Returns the raw reply tuple variant.
    """
    from gi.repository import Gio, GLib

    try:
        return con.call_sync(
            bus_name,
            config.OBJ_PATH,
            config.PROPERTIES_IFACE,
            "Get",
            GLib.Variant("(ss)", (interface, prop)),
            None,
            Gio.DBusCallFlags.NONE,
            config.CALL_TIMEOUT_MS,
            None,
        )
    except GLib.Error as e:
        raise _remote_call_error(e) from e


# ------------------------------------------------------------
# Reply walking
# ------------------------------------------------------------

def _unwrap(variant):
    while variant.get_type_string() == "v":
        variant = variant.get_variant()
    return variant


def reply_entries(reply) -> Iterator[Tuple[str, Tagged]]:
    """
    Yield (key, Tagged) for each entry of the reply's outer dictionary.
    """
    if reply is None or reply.n_children() == 0:
        raise MalformedReplyError("Reply does not have arguments!")

    payload = _unwrap(reply.get_child_value(0))
    sig = payload.get_type_string()
    if not sig.startswith("a{"):
        raise MalformedReplyError(f"Reply is not a dictionary (got {sig!r})")

    for i in range(payload.n_children()):
        entry = payload.get_child_value(i)
        key = entry.get_child_value(0)
        if key.get_type_string() != "s":
            warn(f"skipping entry with {key.get_type_string()!r} key")
            continue
        value = _unwrap(entry.get_child_value(1))
        yield key.get_string(), from_variant(value)


def fetch_metadata(con, player: str = config.DEFAULT_PLAYER,
                   capacity: int = config.STORE_CAPACITY,
                   max_depth: Optional[int] = None) -> Store:
    """
    Query the player's Metadata and return a populated Store.

    The caller owns the store and should release it (use `with`).
    """
    reply = get_property(con, config.bus_name(player))

    store = Store(capacity)
    try:
        for key, tagged in reply_entries(reply):
            decode(tagged, key, store, max_depth=max_depth)
    except BaseException:
        store.close()
        raise
    return store


# ------------------------------------------------------------
# Consumers
# ------------------------------------------------------------

def track_line(store: Store) -> Optional[str]:
    artist = store.get("xesam:artist", Kind.STRING)
    title = store.get("xesam:title", Kind.STRING)
    if not (artist.found and title.found):
        return None
    return f"{artist.value} - {title.value}"
