# path: tests/test_material_db.py
import pytest

from beam_analysis.materials.material_db import MaterialDB, default_materials_path


def test_from_txt_with_header_and_comments(tmp_path):
    p = tmp_path / "mats.txt"
    p.write_text(
        "# comentario\n"
        "name;EI;GA;notes\n"
        "// otro comentario\n"
        "Acero;4,58e12;1e9;laminado\n"
        "Sin EI;;5;se descarta\n"
        "\n"
        "Madera;7.33e11;;\n",
        encoding="utf-8",
    )

    db = MaterialDB.from_txt(p)

    assert db.names() == ["Acero", "Madera"]
    acero = db.get(" Acero ")
    assert acero.properties == {"EI": 4.58e12, "GA": 1e9}
    assert db.get("Madera").properties == {"EI": 7.33e11}
    assert db.get("Sin EI") is None


def test_from_txt_without_header(tmp_path):
    p = tmp_path / "mats.txt"
    p.write_text("B;200\nA;100;3\n", encoding="utf-8")

    db = MaterialDB.from_txt(p)
    assert db.names() == ["A", "B"]
    assert db.get("A").properties == {"EI": 100.0, "GA": 3.0}


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        MaterialDB.from_txt(tmp_path / "no_existe.txt")


def test_no_usable_rows(tmp_path):
    p = tmp_path / "mats.txt"
    p.write_text("# solo comentarios\n", encoding="utf-8")
    with pytest.raises(ValueError):
        MaterialDB.from_txt(p)

    p.write_text("name;GA\nX;1\n", encoding="utf-8")
    with pytest.raises(ValueError):
        MaterialDB.from_txt(p)


def test_default_catalog_loads():
    db = MaterialDB.from_txt(default_materials_path())
    gen = db.get("Genérico")
    assert gen is not None
    assert gen.properties["EI"] == 210000.0
