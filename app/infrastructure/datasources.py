# app/infrastructure/datasources.py
from __future__ import annotations
import csv
from pathlib import Path
from typing import Union, List

import pandas as pd

from app.core.config import ALLOWED_EXTENSIONS

PathLike = Union[str, Path]

_OPENPYXL_EXTS = {".xlsx"}

_DELIMITERS = ",;\t|"
_SNIFF_BYTES = 64 * 1024


def _sniff_sep(path: Path, enc: str) -> str:
    """Separador entre , ; tab e |. CSV do Excel pt-BR costuma vir com ';'."""
    with path.open("r", encoding=enc, newline="") as f:
        sample = f.read(_SNIFF_BYTES)
    try:
        return csv.Sniffer().sniff(sample, delimiters=_DELIMITERS).delimiter
    except csv.Error:
        # uma coluna só (ou amostra ambígua)
        return ","


def _read_csv_enc(path: Path, enc: str) -> pd.DataFrame:
    return pd.read_csv(path, encoding=enc, sep=_sniff_sep(path, enc))


def _read_csv(path: Path) -> pd.DataFrame:
    try_encodings = ["utf-8-sig", "utf-8", "latin-1"]
    last_err: Exception | None = None
    for enc in try_encodings:
        try:
            return _read_csv_enc(path, enc)
        except UnicodeDecodeError as e:
            last_err = e
            continue
        except pd.errors.EmptyDataError:
            return pd.DataFrame()
        except Exception as e:
            raise RuntimeError(f"Não foi possível ler o CSV: {e!s}") from e
    raise RuntimeError(f"Não foi possível ler o CSV (último erro: {last_err!s})")


def _read_excel(path: Path) -> pd.DataFrame:
    suf = path.suffix.lower()
    engine = "openpyxl" if suf in _OPENPYXL_EXTS else "xlrd"
    try:
        return pd.read_excel(path, engine=engine)
    except ImportError as e:
        raise RuntimeError(f"Falta o pacote '{engine}' para ler {suf}.") from e
    except Exception as e:
        raise RuntimeError(f"Erro lendo Excel com engine={engine!r}: {e!s}") from e


def _unique_headers(cols: List[str]) -> List[str]:
    """
    Mantém os nomes originais (trim), mas garante unicidade:
    col, col_2, col_3 ... e cabeçalhos vazios -> Coluna_1, Coluna_2 ...
    Um sufixo nunca reaproveita um nome que já saiu (ex.: 'a', ' a', 'a_2').
    """
    out: List[str] = []
    used: set[str] = set()
    seen: dict[str, int] = {}
    empty_count = 0
    for c in cols:
        base = " ".join(str(c or "").split())
        if not base or base.startswith("Unnamed:"):
            empty_count += 1
            base = f"Coluna_{empty_count}"
        name = base
        n = seen.get(base, 1)
        while name in used:
            n += 1
            name = f"{base}_{n}"
        seen[base] = n
        used.add(name)
        out.append(name)
    return out


def read_dataframe(path: PathLike) -> pd.DataFrame:
    """
    Lê CSV / XLSX / XLS e devolve um DataFrame com cabeçalhos únicos,
    sem linhas ou colunas totalmente vazias.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Arquivo não existe: {p}")

    suf = p.suffix.lower()
    if suf not in ALLOWED_EXTENSIONS:
        allowed = ", ".join(sorted(ALLOWED_EXTENSIONS))
        raise ValueError(f"Extensão não suportada: {suf}. Permitidas: {allowed}")

    if suf == ".csv":
        df = _read_csv(p)
    else:
        df = _read_excel(p)

    df = df.dropna(axis=0, how="all").dropna(axis=1, how="all")
    df = df.reset_index(drop=True)
    df.columns = _unique_headers([str(c) for c in df.columns])
    return df
