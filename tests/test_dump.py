"""
Tests for dump() in perl, json and yaml formats
"""
import json

import pytest
import yaml

from objmeta import mo, mc, Scalar, ArgErr, IOErr
from objmetax import PerlEncoder, PlainEncoder


class Item:
    def __init__(self, name, price):
        self.name = name
        self.price = price
        self._cache = None


class Temperature:
    def __init__(self, celsius):
        self.celsius = celsius

    def to_json(self):
        return {"celsius": self.celsius, "unit": "C"}


class TestPerlDump:
    """Test the perl literal format"""

    def test_mapping(self):
        """Should write sorted keys one per line"""
        assert mo({"table": 300, "chair": 50}).as_perl() == "{\n  'chair' => 50,\n  'table' => 300\n}"

    def test_sequence(self):
        """Should write arrays with undef for None"""
        assert mo([1, "two", None]).as_perl() == "[\n  1,\n  'two',\n  undef\n]"

    def test_empty(self):
        """Should write empty containers inline"""
        assert mo({}).as_perl() == "{}"
        assert mo([]).as_perl() == "[]"

    def test_nested(self):
        """Should indent nested containers"""
        assert mo({"a": [1, 2]}).as_perl() == "{\n  'a' => [\n    1,\n    2\n  ]\n}"

    def test_scalars(self):
        """Should quote strings and non-integer numbers"""
        assert mo("it's").as_perl() == "'it\\'s'"
        assert mo(1.5).as_perl() == "'1.5'"
        assert mo(12345678901).as_perl() == "'12345678901'"
        assert mo(True).as_perl() == "1"
        assert mo(None).as_perl() == "undef"

    def test_references(self):
        """Should mark scalar boxes and code"""
        assert mo(Scalar("v")).as_perl() == "\\'v'"
        assert mo(len).as_perl() == 'sub { "DUMMY" }'

    def test_set_sorted(self):
        """Should write set members in a stable order"""
        assert mo({3, 1, 2}).as_perl() == "[\n  1,\n  2,\n  3\n]"

    def test_blessed_object(self):
        """Should bless objects with their type name"""
        qname = f"{__name__}.Item"
        assert mo(Item("x", 2)).as_perl() == (
            "bless( {\n  '_cache' => undef,\n  'name' => 'x',\n  'price' => 2\n}, '" + qname + "' )")

    def test_compact(self):
        """Should write everything on one line without indent"""
        assert PerlEncoder.encode({"a": 1, "b": [1, 2]}, 0) == "{'a' => 1,'b' => [1,2]}"

    def test_indent_config(self, monkeypatch):
        """Should honor the dump.indent setting"""
        monkeypatch.setenv("OBJMETA_DUMP_INDENT", "4")
        assert mo([1]).as_perl() == "[\n    1\n]"
        monkeypatch.setenv("OBJMETA_DUMP_INDENT", "wide")
        with pytest.raises(ArgErr):
            mo([1]).as_perl()
        monkeypatch.setenv("OBJMETA_DUMP_INDENT", "-1")
        with pytest.raises(ArgErr):
            mo([1]).as_perl()

    def test_cycle(self):
        """Should write a cycle as the path back to the repeated value"""
        a = {}
        a["self"] = a
        assert mo(a).as_perl() == "{\n  'self' => $VAR1\n}"

    def test_nested_cycle(self):
        """Should write back-references below the root as paths"""
        b = {"x": {}, "y": [0]}
        b["x"]["up"] = b["x"]
        b["y"].append(b["y"])
        assert PerlEncoder.encode(b, 0) == "{'x' => {'up' => $VAR1->{'x'}},'y' => [0,$VAR1->{'y'}]}"

    def test_scalar_cycle(self):
        """Should write a scalar holding itself"""
        s = Scalar(None)
        s.set(s)
        assert mo(s).as_perl() == "\\$VAR1"

    def test_non_string_keys(self):
        """Should write numeric keys bare and other keys by their encoding"""
        assert PerlEncoder.encode({1: "a", "1": "b"}, 0) == "{'1' => 'b',1 => 'a'}"
        assert PerlEncoder.encode({None: 1, (1, 2): 2}, 0) == "{[1,2] => 2,undef => 1}"

    def test_shared_not_cycle(self):
        """Should write a value reachable twice without a cycle"""
        shared = [1]
        assert mo([shared, shared]).as_perl() == "[\n  [\n    1\n  ],\n  [\n    1\n  ]\n]"


class TestJsonDump:
    """Test the json format"""

    def test_dump_matches_as_json(self):
        """Should give the same text through dump() and as_json()"""
        data = {"a": [1, 2], "b": None}
        assert mo(data).dump(format="json") == mo(data).as_json()
        assert mo(data).dump("JSON") == mo(data).as_json()

    def test_plain_data(self):
        """Should write containers as json"""
        assert mo({"a": [1, 2]}).as_json() == '{"a": [1, 2]}'
        assert mo((1, "x", True, None)).as_json() == '[1, "x", true, null]'

    def test_objects(self):
        """Should write public attributes of objects"""
        assert json.loads(mo(Item("x", 2)).as_json()) == {"name": "x", "price": 2}

    def test_to_json_hook(self):
        """Should prefer an object's own plain form"""
        assert json.loads(mo(Temperature(20)).as_json()) == {"celsius": 20, "unit": "C"}

    def test_scalar_and_keys(self):
        """Should unwrap scalars and stringify keys"""
        assert mo(Scalar(5)).as_json() == "5"
        assert json.loads(mo({1: "a", None: "b"}).as_json()) == {"1": "a", "null": "b"}

    def test_code_not_serializable(self):
        """Should raise IOErr for functions"""
        with pytest.raises(IOErr):
            mo({"f": len}).as_json()

    def test_class_view(self):
        """Should write a class as its name"""
        assert mc(Item).as_json() == json.dumps(f"{__name__}.Item")


class TestYamlDump:
    """Test the yaml format"""

    def test_block_style(self):
        """Should write block style yaml with a document marker"""
        assert mo({"a": 1, "b": [1, 2]}).as_yaml() == "---\na: 1\nb:\n- 1\n- 2\n"

    def test_round_trip(self):
        """Should load back to the plain form"""
        data = {"item": Item("x", 2), "tags": {"b", "a"}, "t": Temperature(5)}
        assert yaml.safe_load(mo(data).as_yaml()) == PlainEncoder.encode(data)

    def test_dump_matches_as_yaml(self):
        """Should give the same text through dump() and as_yaml()"""
        assert mo([1]).dump("yaml") == mo([1]).as_yaml()


class TestDumpFormat:
    """Test format selection"""

    def test_default_perl(self):
        """Should default to the perl format"""
        assert mo([1]).dump() == mo([1]).as_perl()

    def test_config_format(self, monkeypatch):
        """Should read the default format from config"""
        monkeypatch.setenv("OBJMETA_DUMP_FORMAT", "json")
        assert mo([1]).dump() == "[1]"

    def test_unknown_format(self):
        """Should raise ArgErr for unknown formats"""
        with pytest.raises(ArgErr):
            mo([1]).dump("xml")
