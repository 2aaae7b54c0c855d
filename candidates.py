import re
from pathlib import Path

import pandas as pd

# --- 候補リスト ----------------------------------------------------------------
# APL から Axum までカンマが抜けているため、隣接する文字列が1件に連結される。
# データ担当者に確認中なので修正しないこと（check-candidates で検出される）。
LANGUAGE_CANDIDATES = (
    "A#",
    "A+",
    "A++",
    "ABAP",
    "ABC",
    "ABC ALGOL",
    "ABLE",
    "ABSET",
    "ABSYS",
    "ACC",
    "Accent",
    "Ace DASL",
    "ACL2",
    "ACT-III",
    "Action!",
    "ActionScript",
    "Ada",
    "Adenine",
    "Agda",
    "Agilent VEE",
    "Agora",
    "AIMMS",
    "Alef",
    "ALF",
    "ALGOL 58",
    "ALGOL 60",
    "ALGOL 68",
    "ALGOL W",
    "Alice",
    "Alma-0",
    "AmbientTalk",
    "Amiga E",
    "AMOS",
    "AMPL",
    "Apex",
    "APL"
    "AppleScript"
    "Arc"
    "ARexx"
    "Argus"
    "AspectJ"
    "Assembly language"
    "ATS"
    "Ateji PX"
    "AutoHotkey"
    "Autocoder"
    "AutoIt"
    "AutoLISP / Visual LISP"
    "Averest"
    "AWK"
    "Axum"
)

MAX_NAME_LENGTH = 40
NAME_COLUMN = "Name"

_NAME_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9 #+!/.\-]*$")


class CandidateFileError(ValueError):
    pass


def is_valid_candidate(name):
    """1件の言語名として妥当な形かどうか"""
    if not isinstance(name, str) or not name:
        return False
    if name != name.strip() or len(name) > MAX_NAME_LENGTH:
        return False
    return _NAME_PATTERN.match(name) is not None


def find_malformed(candidates):
    return [name for name in candidates if not is_valid_candidate(name)]


def load_candidates(path):
    """CSV / Excel ファイルの Name 列から候補リストを読み込む。

    空のセルは捨て、重複は最初の1件だけ残す（順序は維持）。
    ファイルが無ければ FileNotFoundError をそのまま投げる。
    """
    path = Path(path)
    if path.suffix.lower() in (".xlsx", ".xls"):
        df = pd.read_excel(path)
    else:
        df = pd.read_csv(path)

    if NAME_COLUMN not in df.columns:
        raise CandidateFileError(f"{path}: '{NAME_COLUMN}' 列が見つかりません。")

    names = df[NAME_COLUMN].dropna().astype(str)
    names = names[names.str.strip() != ""]
    return tuple(names.drop_duplicates().tolist())
