import json

import pytest

from vdf_beacon.bench import vdf_timing


def test_parse_num_list_suffixes():
    assert vdf_timing._parse_num_list("4k, 2^16,1m,") == [4096, 65536, 1 << 20]


def test_bench_reports_points(capsys, tmp_path):
    out_json = tmp_path / "bench.json"
    out_csv = tmp_path / "bench.csv"
    rc = vdf_timing.main([
        "--iters", "2^8,2^10", "--delta", "2", "--reps", "2", "--warmup", "0",
        "--json", str(out_json), "--csv", str(out_csv),
    ])
    assert rc == 0
    printed = capsys.readouterr().out
    assert "ns/square" in printed
    assert "scaling:" in printed

    points = json.loads(out_json.read_text())
    assert [p["T"] for p in points] == [256, 1024]
    assert all(p["ok"] == 2 and p["fail"] == 0 for p in points)
    assert [p["proof_len"] for p in points] == [6, 8]
    assert out_csv.read_text().splitlines()[0].startswith("T,delta,proof_len")


@pytest.mark.parametrize("iters", ["1000", "1"])
def test_bench_rejects_unprovable_t(iters):
    with pytest.raises(SystemExit):
        vdf_timing.main(["--iters", iters, "--delta", "2"])
