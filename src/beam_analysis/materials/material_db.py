from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

from beam_analysis.domain.beam import Material

# Columnas de rigidez reconocidas en el TXT (el resto de columnas se ignora)
STIFFNESS_KEYS = ("EI", "GA", "EA")


class MaterialDB:
    def __init__(self, materials: List[Material]):
        self.materials: List[Material] = list(materials)
        self.by_name: Dict[str, Material] = {m.name.strip(): m for m in self.materials if m.name.strip()}

    def names(self) -> List[str]:
        return [m.name for m in self.materials]

    def get(self, name: str) -> Optional[Material]:
        return self.by_name.get((name or "").strip())

    @staticmethod
    def _norm(s: str) -> str:
        return (s or "").strip()

    @classmethod
    def from_txt(cls, path: str | Path) -> "MaterialDB":
        """
        Formato (separador ';', líneas '#' o '//' ignoradas):

            name;EI;GA;notes
            Acero IPN 200;4.58e12;;perfil laminado

        Sin header se asume name;EI;GA. Filas sin EI numérico se descartan.
        """
        p = Path(path)
        if not p.exists():
            raise FileNotFoundError(f"No existe el archivo de materiales: {p}")

        rows: List[List[str]] = []
        for ln in p.read_text(encoding="utf-8", errors="replace").splitlines():
            t = ln.strip()
            if not t:
                continue
            if t.startswith("#") or t.startswith("//"):
                continue
            rows.append([c.strip() for c in t.split(";")])

        if not rows:
            raise ValueError("Archivo de materiales vacío o sin filas válidas.")

        first = [h.strip().lower() for h in rows[0]]
        has_header = "name" in first or "material" in first or "ei" in first
        header = first if has_header else ["name", "ei", "ga"]
        data_rows = rows[1:] if has_header else rows

        def idx(name: str) -> Optional[int]:
            name_l = name.lower()
            for i, h in enumerate(header):
                if h == name_l:
                    return i
            return None

        i_name = idx("name")
        if i_name is None:
            i_name = idx("material")

        def get_cell(row: List[str], i: Optional[int]) -> str:
            if i is None:
                return ""
            return row[i] if i < len(row) else ""

        def try_float(s: str) -> Optional[float]:
            t = (s or "").strip().replace(",", ".")
            if t == "":
                return None
            try:
                return float(t)
            except ValueError:
                return None

        mats: List[Material] = []
        for r in data_rows:
            name = cls._norm(get_cell(r, i_name)) if i_name is not None else cls._norm(r[0] if r else "")
            if not name:
                continue

            props: Dict[str, float] = {}
            for key in STIFFNESS_KEYS:
                v = try_float(get_cell(r, idx(key)))
                if v is not None:
                    props[key] = v

            if "EI" not in props:
                # sin EI el material no sirve para flecha
                continue

            mats.append(Material(name=name, properties=props))

        if not mats:
            raise ValueError("No se pudieron cargar materiales: falta la columna EI o sus valores.")

        mats.sort(key=lambda m: m.name.upper())
        return cls(mats)


def default_materials_path() -> Path:
    """
    Catálogo incluido en el paquete:
      src/beam_analysis/data/materials.txt
    """
    here = Path(__file__).resolve()
    return here.parents[1] / "data" / "materials.txt"
