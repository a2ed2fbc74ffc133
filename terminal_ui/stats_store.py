import json
from pathlib import Path

from terminal_ui.ui_config import DIFFICULTY_ORDER

STATS_PATH = Path(__file__).with_name("stats.json")


def _empty_bucket():
    return {
        "games_started": 0,
        "games_won": 0,
        "total_moves": 0,
        "best_score": 0,
        "best_time_sec": None,
    }


def _default_stats():
    return {
        "overall": _empty_bucket(),
        "by_difficulty": {d: _empty_bucket() for d in DIFFICULTY_ORDER},
    }


def _as_int(value, default=0):
    try:
        return int(value)
    except Exception:
        return int(default)


def _merge_bucket(dst: dict, src: dict):
    if not isinstance(src, dict):
        return
    dst["games_started"] = max(0, _as_int(src.get("games_started"), dst["games_started"]))
    dst["games_won"] = max(0, _as_int(src.get("games_won"), dst["games_won"]))
    dst["total_moves"] = max(0, _as_int(src.get("total_moves"), dst["total_moves"]))
    dst["best_score"] = max(0, _as_int(src.get("best_score"), dst["best_score"]))
    best_time = src.get("best_time_sec")
    if best_time is not None:
        try:
            dst["best_time_sec"] = max(0.0, float(best_time))
        except Exception:
            pass


def _sanitize(data):
    out = _default_stats()
    if not isinstance(data, dict):
        return out
    _merge_bucket(out["overall"], data.get("overall"))
    by_difficulty = data.get("by_difficulty")
    if isinstance(by_difficulty, dict):
        for key in DIFFICULTY_ORDER:
            _merge_bucket(out["by_difficulty"][key], by_difficulty.get(key))
    return out


def load_stats():
    if not STATS_PATH.exists():
        return _default_stats()
    try:
        return _sanitize(json.loads(STATS_PATH.read_text(encoding="utf-8")))
    except Exception:
        return _default_stats()


def save_stats(stats):
    STATS_PATH.parent.mkdir(parents=True, exist_ok=True)
    STATS_PATH.write_text(json.dumps(_sanitize(stats), ensure_ascii=False, indent=2), encoding="utf-8")


def record_game_started(stats, difficulty):
    stats = _sanitize(stats)
    stats["overall"]["games_started"] += 1
    stats["by_difficulty"][difficulty]["games_started"] += 1
    return stats


def record_game_won(stats, difficulty, duration_sec, moves, score):
    stats = _sanitize(stats)
    for bucket in (stats["overall"], stats["by_difficulty"][difficulty]):
        bucket["games_won"] += 1
        bucket["total_moves"] += max(0, int(moves))
        bucket["best_score"] = max(bucket["best_score"], int(score))
        duration = max(0.0, float(duration_sec))
        if bucket["best_time_sec"] is None or duration < bucket["best_time_sec"]:
            bucket["best_time_sec"] = duration
    return stats
