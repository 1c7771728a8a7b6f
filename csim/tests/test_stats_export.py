import csv
import json

import pytest

from csim.data.stats_export import Exporter, Statistics, export_chart_pdf, format_summary


def _stats():
    s = Statistics()
    s.record_load(False, 101)
    s.record_load(True, 1)
    s.record_store(False, 101)
    s.record_store(True, 1)
    s.record_store(True, 1)
    s.record_eviction(dirty=True)
    return s


def test_counters_and_rates():
    s = _stats()
    assert s.as_tuple() == (2, 3, 1, 1, 2, 1, 205)
    assert s.accesses == 5
    assert s.hits == 3
    assert s.misses == 2
    assert s.hit_rate == pytest.approx(0.6)
    assert s.miss_rate == pytest.approx(0.4)
    assert (s.evictions, s.dirty_evictions) == (1, 1)


def test_empty_rates_are_zero():
    s = Statistics()
    assert s.hit_rate == 0.0
    assert s.miss_rate == 0.0


def test_format_summary_order():
    assert format_summary(_stats()).splitlines() == [
        "Total loads: 2",
        "Total stores: 3",
        "Load hits: 1",
        "Load misses: 1",
        "Store hits: 2",
        "Store misses: 1",
        "Total cycles: 205",
    ]


def test_export_csv(tmp_path):
    path = tmp_path / 'stats.csv'
    Exporter.export_stats_csv(str(path), _stats())
    with open(path, newline='') as f:
        rows = list(csv.reader(f))
    assert rows[0][:7] == ['total_loads', 'total_stores', 'load_hits', 'load_misses',
                           'store_hits', 'store_misses', 'cycles']
    assert rows[1][:7] == ['2', '3', '1', '1', '2', '1', '205']


def test_export_json(tmp_path):
    path = tmp_path / 'stats.json'
    Exporter.export_stats_json(str(path), _stats(), [0.0, 0.5])
    data = json.loads(path.read_text())
    assert data['hit_rate_history'] == [0.0, 0.5]
    assert data['stats']['cycles'] == 205
    assert data['stats']['dirty_evictions'] == 1


def test_export_chart_pdf(tmp_path):
    path = tmp_path / 'chart.pdf'
    assert export_chart_pdf([0.0, 0.5, 0.66], str(path), title='test') == str(path)
    assert path.read_bytes().startswith(b'%PDF')
