import os

import pytest

from cleanroute.file_utils import generate_map_filename, write_output


def test_write_output(tmp_path):
    destination = tmp_path / "clean.csv"
    write_output(str(destination), "0.0, 0.0, 0\n")
    assert destination.read_text() == "0.0, 0.0, 0\n"


def test_write_output_missing_directory(tmp_path):
    with pytest.raises(OSError):
        write_output(str(tmp_path / "nope" / "clean.csv"), "x")


def test_generate_map_filename_drops_csv_extension(tmp_path):
    source = tmp_path / "Cab Route.CSV"
    filename = generate_map_filename(str(source))
    assert filename == os.path.join(str(tmp_path), "Cab Route map.html")
    assert os.path.exists(filename)


def test_generate_map_filename_numbers_existing_files(tmp_path):
    source = str(tmp_path / "route.csv")
    first = generate_map_filename(source)
    second = generate_map_filename(source)
    third = generate_map_filename(source)

    assert first.endswith("route map.html")
    assert second.endswith("route map (1).html")
    assert third.endswith("route map (2).html")


def test_generate_map_filename_keeps_other_extensions(tmp_path):
    filename = generate_map_filename(str(tmp_path / "route.txt"))
    assert filename.endswith("route.txt map.html")


def test_generate_map_filename_gives_up(tmp_path):
    source = str(tmp_path / "route.csv")
    (tmp_path / "route map.html").touch()
    for i in range(1, 100):
        (tmp_path / f"route map ({i}).html").touch()

    with pytest.raises(RuntimeError):
        generate_map_filename(source)
