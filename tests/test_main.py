import json

from main import main


def _write(tmp_path, name, data):
    path = tmp_path / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def test_start_request_prints_infinity(tmp_path, capsys):
    config = _write(tmp_path, "config.json", {"topicName": "/ref", "publishRate": 10})
    assert main(["--config", config, "--start-request"]) == 0
    out = capsys.readouterr().out
    name, payload = out.split("\n", 1)
    assert name == "/ref/start"
    assert '"total_time": Infinity' in payload
    assert json.loads(payload)["signal_type"] == ["step"]


def test_tree_lists_filtered_topics(tmp_path, capsys):
    topics = _write(tmp_path, "topics.json", [
        {"name": "/one", "schemaName": "std_msgs/msg/Float64"},
        {"name": "/many", "schemaName": "std_msgs/msg/Float64MultiArray"},
    ])
    assert main(["--variant", "single", "--topics", topics]) == 0
    tree = json.loads(capsys.readouterr().out)
    assert [o["value"] for o in tree["general"]["fields"]["topicName"]["options"]] == ["/one"]
    assert set(tree) == {"general", "signal"}


def test_preview_summary(tmp_path, capsys):
    config = _write(tmp_path, "config.json", {"publishRate": 100, "paths": [{"signalType": "sine"}, {}]})
    assert main(["--config", config, "--preview", "2"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "201 samples over 2.0 s at 100 Hz"
    assert lines[1].startswith("signal 1: min=")
    assert len(lines) == 3


def test_bad_config_fails(tmp_path):
    config = _write(tmp_path, "config.json", {"publishRate": -1})
    assert main(["--config", config]) == 1


def test_unbounded_preview_without_duration_fails(tmp_path):
    config = _write(tmp_path, "config.json", {"publishRate": 10})
    assert main(["--config", config, "--preview", "inf"]) == 1
