import json

from route_optimizer.cli import main

STOPS = """\
# lat,lon
41.52,-70.67
41.63,-70.28
41.25,-70.10
41.39,-70.51
41.70,-70.05
41.45,-70.60
"""


def write_stops(tmp_path, text=STOPS):
    path = tmp_path / 'stops.csv'
    path.write_text(text, encoding='utf-8')
    return path


def test_text_report_and_kml(tmp_path, capsys):
    path = write_stops(tmp_path)
    assert main([str(path)]) == 0
    out = capsys.readouterr().out
    assert 'Number of coordinates: 6' in out
    assert 'Total distance: ' in out and 'nm' in out
    line = next(l for l in out.splitlines() if l.startswith('Tour path:'))
    stops = [int(x) for x in line.split(':', 1)[1].split()]
    assert len(stops) == 7
    assert stops[0] == stops[-1]
    assert sorted(stops[:-1]) == [1, 2, 3, 4, 5, 6]
    assert (tmp_path / 'stops.kml').exists()


def test_json_report(tmp_path, capsys):
    path = write_stops(tmp_path, STOPS + "41.52,-70.67\n")
    out_kml = tmp_path / 'out' / 'route.kml'
    out_kml.parent.mkdir()
    assert main([str(path), '--json', '--output', str(out_kml), '--distance', 'haversine',
                 '--matching', 'exact']) == 0
    report = json.loads(capsys.readouterr().out)
    assert report['coordinates'] == 6
    assert report['duplicates_removed'] == 1
    assert report['scale'] == 1.0
    assert report['kml'] == str(out_kml)
    assert len(report['path']) == 7
    assert out_kml.exists()


def test_duplicates_reported(tmp_path, capsys):
    path = write_stops(tmp_path, STOPS + "41.25,-70.10\n41.25,-70.10\n")
    assert main([str(path), '--no-2opt']) == 0
    assert '2 duplicate coordinates removed.' in capsys.readouterr().out


def test_scaling_reported(tmp_path, capsys):
    path = write_stops(tmp_path, STOPS + "41.525,-70.67\n")
    assert main([str(path)]) == 0
    assert '2x distance scaling applied.' in capsys.readouterr().out


def test_too_few_points(tmp_path, capsys):
    path = write_stops(tmp_path, "41.52,-70.67\n41.63,-70.28\n41.25,-70.10\n")
    assert main([str(path)]) == 1
    assert 'Invalid number of vertices' in capsys.readouterr().err


def test_missing_input(tmp_path, capsys):
    assert main([str(tmp_path / 'missing.csv')]) == 1
    assert 'error:' in capsys.readouterr().err


def test_points_too_close(tmp_path, capsys):
    path = write_stops(tmp_path, STOPS + "41.5200001,-70.67\n")
    assert main([str(path)]) == 1
    assert 'Insufficient distance' in capsys.readouterr().err


def test_binary_input(tmp_path, capsys):
    path = tmp_path / 'stops.csv'
    path.write_bytes(b'41.52,-70.67\n\xff\xfe,1\n')
    assert main([str(path)]) == 1
    err = capsys.readouterr().err
    assert err.startswith('error:')
    assert 'not a UTF-8 text file' in err


def test_extra_columns_rejected(tmp_path, capsys):
    path = write_stops(tmp_path, "41.52,-70.67,foo\n" + STOPS)
    assert main([str(path)]) == 1
    assert "expected 'lat,lon'" in capsys.readouterr().err
