import curses
import sys
import tempfile
import threading
import unittest
import wave
from pathlib import Path
from unittest.mock import MagicMock, patch

from terminal_ui import settings_store, stats_store
from terminal_ui.curses_interface import format_time, key_to_command
from terminal_ui.sound_fx import BLIPS, MUSIC_BARS, SAMPLE_RATE, MusicPlayer, SoundFxManager
from terminal_ui.window_watcher import WindowWatcher


class SettingsStoreTestCase(unittest.TestCase):
    def test_missing_file_gives_defaults(self):
        with tempfile.TemporaryDirectory() as td:
            with patch.object(settings_store, "SETTINGS_PATH", Path(td) / "settings.ini"):
                data = settings_store.load_settings()
        self.assertEqual(settings_store.DEFAULT_SETTINGS, data)

    def test_save_then_load(self):
        with tempfile.TemporaryDirectory() as td:
            ini_path = Path(td) / "settings.ini"
            with patch.object(settings_store, "SETTINGS_PATH", ini_path):
                settings_store.save_settings({"difficulty": "Hard", "sound_fx": "no", "seed": " 12 ", "theme": "x"})
                data = settings_store.load_settings()
            text = ini_path.read_text(encoding="utf-8")
        self.assertIn("[game]", text)
        self.assertNotIn("theme", text)
        self.assertEqual({"difficulty": "Hard", "music": "on", "sound_fx": "off", "seed": "12"}, data)
        self.assertTrue(settings_store.music_enabled(data))
        self.assertFalse(settings_store.sound_enabled(data))
        self.assertEqual(12, settings_store.seed_of(data))

    def test_bad_values_are_replaced(self):
        with tempfile.TemporaryDirectory() as td:
            ini_path = Path(td) / "settings.ini"
            ini_path.write_text("[game]\ndifficulty = Medium\nseed = abc\n", encoding="utf-8")
            with patch.object(settings_store, "SETTINGS_PATH", ini_path):
                data = settings_store.load_settings()
        self.assertEqual("Easy", data["difficulty"])
        self.assertEqual("on", data["sound_fx"])
        self.assertIsNone(settings_store.seed_of(data))


class StatsStoreTestCase(unittest.TestCase):
    def test_record_and_persist(self):
        with tempfile.TemporaryDirectory() as td:
            json_path = Path(td) / "stats.json"
            with patch.object(stats_store, "STATS_PATH", json_path):
                stats = stats_store.load_stats()
                stats = stats_store.record_game_started(stats, "Hard")
                stats = stats_store.record_game_won(stats, "Hard", 120.5, 80, 900)
                stats = stats_store.record_game_won(stats, "Hard", 200.0, 60, 850)
                stats_store.save_stats(stats)
                loaded = stats_store.load_stats()
        hard = loaded["by_difficulty"]["Hard"]
        self.assertEqual(1, hard["games_started"])
        self.assertEqual(2, hard["games_won"])
        self.assertEqual(140, hard["total_moves"])
        self.assertEqual(900, hard["best_score"])
        self.assertEqual(120.5, hard["best_time_sec"])
        self.assertEqual(2, loaded["overall"]["games_won"])
        self.assertEqual(0, loaded["by_difficulty"]["Easy"]["games_won"])

    def test_corrupt_file_gives_defaults(self):
        with tempfile.TemporaryDirectory() as td:
            json_path = Path(td) / "stats.json"
            json_path.write_text("{not json", encoding="utf-8")
            with patch.object(stats_store, "STATS_PATH", json_path):
                stats = stats_store.load_stats()
        self.assertEqual(0, stats["overall"]["games_started"])
        self.assertIsNone(stats["overall"]["best_time_sec"])


class WindowWatcherTestCase(unittest.TestCase):
    def test_poll_reports_changes(self):
        sizes = [(120, 50)]
        changes = []
        watcher = WindowWatcher(changes.append, size_fn=lambda: sizes[-1])
        self.assertTrue(watcher.available)
        self.assertFalse(watcher.poll_once())

        sizes.append((80, 50))
        self.assertTrue(watcher.poll_once())
        self.assertEqual([False], changes)
        self.assertFalse(watcher.poll_once())

        sizes.append((130, 45))
        self.assertTrue(watcher.poll_once())
        self.assertEqual([False, True], changes)

    def test_stop_waits_for_thread(self):
        watcher = WindowWatcher(lambda available: None, size_fn=lambda: (120, 50))
        watcher.start()
        thread = watcher._thread
        self.assertTrue(thread.is_alive())
        watcher.stop()
        self.assertFalse(thread.is_alive())
        self.assertIsNone(watcher._thread)

    def test_minimum_size(self):
        watcher = WindowWatcher(lambda available: None, size_fn=lambda: (96, 40))
        self.assertTrue(watcher.fits((96, 40)))
        self.assertFalse(watcher.fits((95, 40)))
        self.assertFalse(watcher.fits((96, 39)))


class SoundFxTestCase(unittest.TestCase):
    def test_blip_is_mono_16_bit(self):
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "move.wav"
            SoundFxManager._write_blip(path, *BLIPS["move"])
            with wave.open(str(path), "rb") as wf:
                self.assertEqual(1, wf.getnchannels())
                self.assertEqual(2, wf.getsampwidth())
                self.assertEqual(SAMPLE_RATE, wf.getframerate())
                self.assertEqual(int(SAMPLE_RATE * BLIPS["move"][2]), wf.getnframes())

    def test_disabled_manager_plays_nothing(self):
        with patch.object(SoundFxManager, "_ensure_assets"), \
                patch("terminal_ui.sound_fx.subprocess.Popen") as popen:
            fx = SoundFxManager(enabled=False)
            fx.play("move")
        popen.assert_not_called()


class MusicPlayerTestCase(unittest.TestCase):
    def test_track_is_generated_once(self):
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "music.wav"
            MusicPlayer(enabled=False, path=path)
            with wave.open(str(path), "rb") as wf:
                self.assertEqual(1, wf.getnchannels())
                self.assertEqual(len(MUSIC_BARS) * 8 * int(SAMPLE_RATE * 0.25), wf.getnframes())
            stamp = path.stat().st_mtime_ns
            MusicPlayer(enabled=False, path=path)
            self.assertEqual(stamp, path.stat().st_mtime_ns)

    def test_disabled_player_stays_silent(self):
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "music.wav"
            path.write_bytes(b"")
            with patch("terminal_ui.sound_fx.subprocess.Popen") as popen:
                player = MusicPlayer(enabled=False, path=path)
                player.start()
                self.assertFalse(player.playing)
        popen.assert_not_called()

    @unittest.skipIf(sys.platform == "win32", "winsound loops the track itself")
    def test_enabling_starts_the_loop(self):
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "music.wav"
            path.write_bytes(b"")
            played = threading.Event()

            def finish():
                played.set()
                return 1

            process = MagicMock()
            process.wait.side_effect = finish
            process.poll.return_value = 1
            with patch("terminal_ui.sound_fx.subprocess.Popen", return_value=process) as popen:
                player = MusicPlayer(enabled=False, path=path)
                player._player = "player"
                player.enabled = True
                self.assertTrue(played.wait(2.0))
                player.stop()
            self.assertTrue(player.enabled)
            popen.assert_called_once()
            self.assertEqual(["player", str(path)], popen.call_args[0][0])
            player.enabled = False
            self.assertFalse(player.playing)


class KeyMappingTestCase(unittest.TestCase):
    def test_keys(self):
        self.assertEqual("up", key_to_command(curses.KEY_UP))
        self.assertEqual("action", key_to_command(10))
        self.assertEqual("cancel", key_to_command(ord(" ")))
        self.assertIsNone(key_to_command(ord("z")))

    def test_format_time(self):
        self.assertEqual("00:00", format_time(0))
        self.assertEqual("02:05", format_time(125.9))
        self.assertEqual("61:01", format_time(3661))


if __name__ == "__main__":
    unittest.main()
