# tests/conftest.py
import os
import sys

import pytest

# path to the repo root (one level up from tests/)
REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# ensure repo root is importable so `import spotimeta.*` works without install
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from spotimeta.core.store import Store  # noqa: E402


@pytest.fixture
def store():
    with Store() as s:
        yield s


# ------------------------------------------------------------
# Stand-in for GLib.Variant
# ------------------------------------------------------------

class FakeVariant:
    """
    Just the GLib.Variant accessors the reply walker uses, so reply handling
    is covered without PyGObject installed.
    """

    def __init__(self, sig, value=None, children=()):
        self.sig = sig
        self.value = value
        self.children = list(children)

    def get_type_string(self):
        return self.sig

    def n_children(self):
        return len(self.children)

    def get_child_value(self, i):
        return self.children[i]

    def get_variant(self):
        assert self.sig == "v"
        return self.value

    def get_string(self):
        return self.value

    get_int32 = get_uint64 = get_double = get_string

    # ---- builders ----

    @classmethod
    def array(cls, sig, items):
        return cls(sig, children=items)

    @classmethod
    def boxed(cls, inner):
        return cls("v", inner)

    @classmethod
    def vardict(cls, mapping):
        return cls("a{sv}", children=[
            cls("{sv}", children=[cls("s", key), cls.boxed(value)])
            for key, value in mapping.items()
        ])

    @classmethod
    def reply(cls, mapping):
        return cls("(v)", children=[cls.boxed(cls.vardict(mapping))])


@pytest.fixture
def fake_variant():
    return FakeVariant
