"""Shared test fixtures for zhuyin-dict."""

import pytest

from zhuyin_dict import LexiconEngine, LexiconStore
from zhuyin_dict import db

# Idiom revision without most extended columns. The last row is a legacy
# batch row: numeric id in ``word``, every field one column to the right.
IDIOM_DDL = """
CREATE TABLE entries (
    word TEXT,
    phonetic TEXT,
    pinyin TEXT,
    definition TEXT,
    source TEXT,
    example TEXT,
    synonyms TEXT,
    antonyms TEXT
)
"""

IDIOM_ROWS = [
    ("一", "ㄧ", "yī", "1.數目名。2.全、滿。如：一身是汗。", "", "", "", ""),
    ("一心", "ㄧ ㄒㄧㄣ", "yī xīn", "同心。", "", "", "", ""),
    ("一心一意", "ㄧ ㄒㄧㄣ ㄧ ㄧˋ", "yī xīn yī yì",
     "心意專一，毫無雜念。", "", "", "全心全意", "三心二意"),
    ("專心一意", "ㄓㄨㄢ ㄒㄧㄣ ㄧ ㄧˋ", "zhuān xīn yī yì",
     "集中心思，專注於一件事。", "", "", "", ""),
    ("一帆風順", "ㄧ ㄈㄢ ㄈㄥ ㄕㄨㄣˋ", "yī fān fēng shùn",
     "比喻非常順利，沒有阻礙。", "", "", "一路順風、萬事亨通", "一波三折"),
    ("不可思議", "ㄅㄨˋ ㄎㄜˇ ㄙ ㄧˋ", "bù kě sī yì",
     "原為佛教用語，指不可用心思忖度，不可用言語議論。", "《維摩詰經》", "", "", ""),
    ("不亦樂乎", "ㄅㄨˊ ㄧˋ ㄌㄜˋ ㄏㄨ", "bú yì lè hū",
     "不也是很快樂的嗎？", "《論語》", "", "", ""),
    ("畫龍點睛", "（變）ㄏㄨㄚˋ ㄌㄨㄥˊ ㄉㄧㄢˇ ㄐㄧㄥ", "huà lóng diǎn jīng",
     "比喻在關鍵處加上一筆，使全體更加生動。", "", "", "", ""),
    ("1024", "畫蛇添足", "ㄏㄨㄚˋ ㄕㄜˊ ㄊㄧㄢ ㄗㄨˊ", "huà shé tiān zú",
     "比喻多此一舉，反而弄巧成拙。", "《戰國策》", "", "多此一舉"),
]

CHARACTER_DDL = """
CREATE TABLE entries (
    word TEXT,
    phonetic TEXT,
    definition TEXT,
    radical TEXT,
    stroke_count INTEGER
)
"""

CHARACTER_ROWS = [
    ("一", "ㄧ", "數目名。", "一", 1),
    ("衣", "ㄧ", "衣服。", "衣", 6),
    ("醫", "ㄧ", "治病的人。", "酉", 18),
    ("姨", "ㄧˊ", "稱謂。母親的姊妹。", "女", 9),
    ("已", "ㄧˇ", "已經。", "己", 3),
    ("意", "ㄧˋ", "心意。", "心", 13),
    ("八", "ㄅㄚ", "數目名。", "八", 2),
    ("巴", "ㄅㄚ", "盼望。", "己", 4),
    ("拔", "ㄅㄚˊ", "拉出。", "手", 8),
    ("把", "ㄅㄚˇ", "握住。", "手", 7),
    ("爸", "ㄅㄚˋ", "父親。", "父", 8),
    ("不", "ㄅㄨˋ", "表示否定。", "一", 4),
    ("布", "ㄅㄨˋ", "紡織品。", "巾", 5),
    ("補", "ㄅㄨˇ", "修補。", "衣", 12),
    ("媽", "ㄇㄚ", "母親。", "女", 13),
    ("嗎", "˙ㄇㄚ", "疑問助詞。", "口", 13),
]


def _connect_entries(ddl, rows, path=":memory:"):
    conn = db.connect(path)
    conn.execute(ddl)
    placeholders = ", ".join("?" for _ in rows[0])
    conn.executemany(f"INSERT INTO entries VALUES ({placeholders})", rows)
    conn.commit()
    return conn


@pytest.fixture
def make_connection():
    """Factory for connections holding an ``entries`` table with given rows."""
    opened = []

    def _make(ddl, rows):
        conn = _connect_entries(ddl, rows)
        opened.append(conn)
        return conn

    yield _make
    for conn in opened:
        conn.close()


@pytest.fixture
def idiom_connection(make_connection):
    """Raw idiom-layout connection, no store tables."""
    return make_connection(IDIOM_DDL, IDIOM_ROWS)


@pytest.fixture
def character_connection(make_connection):
    """Raw character-layout connection, no store tables."""
    return make_connection(CHARACTER_DDL, CHARACTER_ROWS)


@pytest.fixture
def idiom_store():
    """In-memory idiom store, including one legacy shifted row."""
    with LexiconStore.from_connection(_connect_entries(IDIOM_DDL, IDIOM_ROWS)) as store:
        yield store


@pytest.fixture
def character_store():
    """In-memory single-character store with stroke counts."""
    conn = _connect_entries(CHARACTER_DDL, CHARACTER_ROWS)
    with LexiconStore.from_connection(conn) as store:
        yield store


@pytest.fixture
def engine(idiom_store):
    """Engine over the idiom store."""
    return LexiconEngine(idiom_store)


@pytest.fixture
def character_engine(character_store):
    """Engine over the character store."""
    return LexiconEngine(character_store)


@pytest.fixture
def lexicon_file(tmp_path):
    """Path to an idiom lexicon file on disk."""
    path = tmp_path / "bundle" / "dictionary.sqlite"
    path.parent.mkdir()
    conn = _connect_entries(IDIOM_DDL, IDIOM_ROWS, path)
    conn.close()
    return path
