import json

import numpy as np
import pytest
from inline_snapshot import snapshot

from randregress import GoldenIOError
from randregress.golden import GoldenEntry, GoldenTable, decode_value, encode_value, render_table, type_name, write_table
from randregress.invoker import Invocation
from randregress.kinds import ResultKind

LOG = [
    Invocation('float64', 0, '', ResultKind.FLOAT64, np.float64(0.5)),
    Invocation('float64', 1, '', ResultKind.FLOAT64, np.float64(0.25)),
    Invocation('perm', 0, '3', ResultKind.INT_SEQUENCE, [2, 0, 1]),
]


def test_render_table():
    assert render_table(LOG, seed=1, repeats=2) == snapshot("""\
{
  "seed": 1,
  "repeats": 2,
  "entries": [
    {"type": "float64", "value": 0.5, "op": "float64", "arg": "", "repeat": 0},
    {"type": "float64", "value": 0.25, "op": "float64", "arg": "", "repeat": 1},

    {"type": "ints", "value": [2, 0, 1], "op": "perm", "arg": "3", "repeat": 0}
  ]
}
""")


def test_rendered_table_is_json():
    document = json.loads(render_table(LOG, seed=1, repeats=2))
    assert [e['op'] for e in document['entries']] == ['float64', 'float64', 'perm']


def test_render_empty_table(tmp_path):
    text = render_table([], seed=1, repeats=20)
    assert text == snapshot("""\
{
  "seed": 1,
  "repeats": 20,
  "entries": []
}
""")
    path = tmp_path / 'empty.json'
    write_table(path, text)
    assert len(GoldenTable.load(path)) == 0


def test_render_refuses_skipped_positions():
    log = [Invocation('intn', 9, '1000000000000000000', ResultKind.INT, skipped=True)]
    with pytest.raises(ValueError, match=r'cannot record skipped invocation r\.intn\(1000000000000000000\)'):
        render_table(log, seed=1, repeats=20)


def test_round_trip_keeps_types_and_bits(tmp_path):
    values = [
        np.float64(0.1),
        np.float32(0.1),
        np.float64(-0.0),
        np.float64(5e-324),
        np.int64(2**63 - 1),
        np.uint64(2**64 - 1),
        np.int32(2**31 - 1),
        np.uint32(2**32 - 1),
        [],
        [3, 1, 0, 2],
    ]
    log = [Invocation(f'op{i}', 0, '', ResultKind.FLOAT64, v) for i, v in enumerate(values)]
    path = tmp_path / 'golden' / 'regress.json'
    write_table(path, render_table(log, seed=7, repeats=1))

    table = GoldenTable.load(path)
    assert (table.seed, table.repeats, len(table)) == (7, 1, len(values))
    for entry, value in zip(table.entries, values):
        if isinstance(value, list):
            assert entry.value == value
        else:
            assert type(entry.value) is type(value)
            assert entry.value.tobytes() == value.tobytes()
    assert table.entries[1].operation == 'op1'
    assert table.entries[1].type_name == 'float32'


def test_float32_is_stored_as_exact_widening():
    assert encode_value(np.float32(0.1)) == ('float32', 0.10000000149011612)


def test_type_name():
    assert type_name(np.uint32(1)) == 'uint32'
    assert type_name([1]) == 'ints'
    with pytest.raises(TypeError, match='cannot record value of type float'):
        type_name(0.5)


def test_decode_rejects_bad_values():
    with pytest.raises(ValueError, match="unknown golden value type 'int16'"):
        decode_value('int16', 1)
    with pytest.raises(ValueError, match='expected an integer for int64'):
        decode_value('int64', 1.5)
    with pytest.raises(ValueError, match='expected a number for uint32'):
        decode_value('uint32', True)
    with pytest.raises(ValueError, match='expected a list of ints'):
        decode_value('ints', [1, 'a'])


def test_load_missing_file(tmp_path):
    with pytest.raises(GoldenIOError, match='cannot read golden table'):
        GoldenTable.load(tmp_path / 'nope.json')


def test_load_bad_json(tmp_path):
    path = tmp_path / 'bad.json'
    path.write_text('{"seed": 1,')
    with pytest.raises(GoldenIOError, match='cannot decode golden table'):
        GoldenTable.load(path)


def test_load_malformed_table(tmp_path):
    path = tmp_path / 'bad.json'
    path.write_text(json.dumps({'seed': 1, 'repeats': 20, 'entries': [{'type': 'int16', 'value': 1}]}))
    with pytest.raises(GoldenIOError, match='malformed golden table'):
        GoldenTable.load(path)

    path.write_text(json.dumps({'seed': 1, 'entries': []}))
    with pytest.raises(GoldenIOError, match='malformed golden table'):
        GoldenTable.load(path)


def test_entry_defaults():
    entry = GoldenEntry(np.int64(3))
    assert (entry.operation, entry.argument, entry.type_name) == ('', '', 'int64')
