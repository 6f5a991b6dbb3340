"""
Tests for content checksums and the Digest helper
"""
import base64
import collections
import hashlib

import pytest

from objmeta import mo, mc, Digest, Scalar, ArgErr


class Item:
    def __init__(self, name):
        self.name = name


class Other:
    def __init__(self, name):
        self.name = name


class TestChecksum:
    """Test mo().checksum()"""

    def test_default_sha1_hex(self):
        """Should default to a hex sha1 digest"""
        c = mo({"a": 1}).checksum()
        assert len(c) == 40
        int(c, 16)

    def test_canonical_input(self):
        """Should digest the type name and the compact dump"""
        assert mo(42).checksum() == hashlib.sha1(b"int\n42").hexdigest()
        assert mo({"b": 2, "a": 1}).checksum() == hashlib.sha1(b"dict\n{'a' => 1,'b' => 2}").hexdigest()

    def test_stable(self):
        """Should not change while the value does not"""
        x = {"chair": 50, "table": [1, 2]}
        assert mo(x).checksum() == mo(x).checksum()
        assert mo(x).checksum() == mo({"table": [1, 2], "chair": 50}).checksum()

    def test_changes_with_content(self):
        """Should change when the value is mutated"""
        x = {"a": 1}
        before = mo(x).checksum()
        x["a"] = 2
        assert mo(x).checksum() != before

    def test_type_sensitive(self):
        """Should differ for equal content under different types"""
        assert mo([1, 2]).checksum() != mo((1, 2)).checksum()
        assert mo(1).checksum() != mo("1").checksum()
        assert mo(Item("x")).checksum() != mo(Other("x")).checksum()
        assert mo({"a": 1}).checksum() != mo(collections.OrderedDict(a=1)).checksum()

    def test_md5(self):
        """Should support md5"""
        assert len(mo([1]).checksum(algorithm="md5")) == 32
        assert mo([1]).checksum(algorithm="MD5") == mo([1]).checksum(algorithm="md5")

    def test_formats(self):
        """Should produce hex, unpadded base64 and raw bytes"""
        raw = mo([1]).checksum(format="binary")
        assert isinstance(raw, bytes) and len(raw) == 20
        assert mo([1]).checksum(format="hex") == raw.hex()
        b64 = mo([1]).checksum(format="base64")
        assert len(b64) == 27
        assert base64.b64decode(b64 + "=") == raw
        assert len(mo([1]).checksum("md5", "base64")) == 22

    def test_invalid_options(self):
        """Should raise ArgErr for unknown algorithms and formats"""
        with pytest.raises(ArgErr):
            mo([1]).checksum(algorithm="sha256")
        with pytest.raises(ArgErr):
            mo([1]).checksum(format="octal")

    def test_config_defaults(self, monkeypatch):
        """Should read default algorithm and format from config"""
        monkeypatch.setenv("OBJMETA_CHECKSUM_ALGORITHM", "md5")
        monkeypatch.setenv("OBJMETA_CHECKSUM_FORMAT", "base64")
        assert mo([1]).checksum() == mo([1]).checksum("md5", "base64")

    def test_class_view(self):
        """Should digest the class itself in class-view"""
        assert mc(Item).checksum() == mo(Item).checksum()

    def test_scalar(self):
        """Should digest a scalar by its content"""
        assert mo(Scalar("a")).checksum() != mo(Scalar("b")).checksum()

    def test_cycle(self):
        """Should digest cyclic structures through their back-references"""
        a = {"n": 1}
        a["self"] = a
        c = mo(a).checksum()
        assert c == mo(a).checksum()
        assert c == hashlib.sha1(b"dict\n{'n' => 1,'self' => $VAR1}").hexdigest()
        a["n"] = 2
        assert mo(a).checksum() != c

    def test_non_string_keys_distinct(self):
        """Should tell integer keys from string keys"""
        assert mo({1: "a"}).checksum() != mo({"1": "a"}).checksum()
        assert mo({None: "a"}).checksum() != mo({"": "a"}).checksum()


class TestDigest:
    """Test the Digest helper"""

    def test_algorithm_names(self):
        """Should normalize algorithm names"""
        assert Digest("SHA-1").algorithm() == "sha1"
        assert Digest("md5").digestSize() == 16
        with pytest.raises(ArgErr):
            Digest("crc32")

    def test_update_and_digest(self):
        """Should digest incremental updates and reset afterwards"""
        d = Digest("sha1")
        d.update("ab").update(b"c")
        assert d.digest() == hashlib.sha1(b"abc").digest()
        assert d.digest() == hashlib.sha1(b"").digest()

    def test_checksum(self):
        """Should digest a string in one step"""
        assert Digest.checksum("abc") == hashlib.sha1(b"abc").hexdigest()
        assert Digest.checksum("abc", "md5", "binary") == hashlib.md5(b"abc").digest()
