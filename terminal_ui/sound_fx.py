import math
import random
import struct
import subprocess
import sys
import threading
import wave
from pathlib import Path
from shutil import which
from time import time

SAMPLE_RATE = 22050
ASSET_DIR = Path(__file__).with_name("assets").joinpath("sfx")

# key: (start Hz, end Hz, duration s, decay, noise level, noise seed)
BLIPS = {
    "operation": (880.0, 920.0, 0.03, 60.0, 0.02, 3),
    "move": (220.0, 180.0, 0.07, 28.0, 0.10, 7),
    "start": (330.0, 660.0, 0.18, 9.0, 0.03, 5),
    "pause": (520.0, 390.0, 0.10, 18.0, 0.02, 13),
    "resume": (390.0, 520.0, 0.10, 18.0, 0.02, 17),
    "foundation": (520.0, 780.0, 0.12, 14.0, 0.05, 23),
}

MIN_INTERVAL = {
    "operation": 0.02,
    "move": 0.04,
    "shuffle": 0.2,
    "foundation": 0.06,
    "victory": 0.5,
}


class SoundFxManager:
    def __init__(self, enabled=True):
        self.enabled = enabled
        self.asset_dir = ASSET_DIR
        self.keys = tuple(BLIPS) + ("shuffle", "victory")
        self.paths = {key: self.asset_dir / f"{key}.wav" for key in self.keys}
        self.last_play = {key: 0.0 for key in self.keys}
        self._linux_player = which("paplay") or which("aplay")
        self._ensure_assets()

    def play(self, key: str):
        if not self.enabled or key not in self.paths:
            return
        path = self.paths[key]
        if not path.exists():
            return
        now = time()
        if now - self.last_play.get(key, 0.0) < MIN_INTERVAL.get(key, 0.0):
            return
        self.last_play[key] = now

        try:
            if sys.platform == "win32":
                import winsound

                winsound.PlaySound(str(path), winsound.SND_ASYNC | winsound.SND_FILENAME | winsound.SND_NODEFAULT)
                return
            if sys.platform == "darwin":
                if which("afplay"):
                    subprocess.Popen(["afplay", str(path)], stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
                return
            if self._linux_player:
                subprocess.Popen([self._linux_player, str(path)], stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
        except Exception:
            # Never break gameplay for audio failures.
            return

    def _ensure_assets(self):
        try:
            self.asset_dir.mkdir(parents=True, exist_ok=True)
            for key, params in BLIPS.items():
                if not self.paths[key].exists():
                    self._write_blip(self.paths[key], *params)
            if not self.paths["shuffle"].exists():
                self._write_shuffle(self.paths["shuffle"])
            if not self.paths["victory"].exists():
                self._write_victory(self.paths["victory"])
        except Exception:
            self.enabled = False

    @staticmethod
    def _write_wav(path: Path, samples, sample_rate=SAMPLE_RATE):
        with wave.open(str(path), "wb") as wf:
            wf.setnchannels(1)
            wf.setsampwidth(2)
            wf.setframerate(sample_rate)
            frames = b"".join(struct.pack("<h", max(-32767, min(32767, int(s * 32767)))) for s in samples)
            wf.writeframes(frames)

    @staticmethod
    def _write_blip(path: Path, f_start, f_end, duration, decay, noise_level, seed):
        total = int(SAMPLE_RATE * duration)
        samples = []
        rng = random.Random(seed)
        for i in range(total):
            t = i / SAMPLE_RATE
            f = f_start + (f_end - f_start) * (t / duration)
            env = math.exp(-decay * t)
            tone = math.sin(2.0 * math.pi * f * t) * 0.6
            tone += math.sin(2.0 * math.pi * (f * 2.0) * t) * 0.15
            noise = (rng.random() * 2.0 - 1.0) * noise_level
            samples.append((tone + noise) * env * 0.7)
        SoundFxManager._write_wav(path, samples)

    @staticmethod
    def _write_shuffle(path: Path):
        # a ripple of short paper flicks
        samples = []
        rng = random.Random(31)
        for flick in range(9):
            total = int(SAMPLE_RATE * 0.035)
            for i in range(total):
                t = i / SAMPLE_RATE
                env = math.exp(-70.0 * t)
                noise = rng.random() * 2.0 - 1.0
                tone = math.sin(2.0 * math.pi * (300.0 + flick * 25.0) * t) * 0.2
                samples.append((noise * 0.5 + tone) * env * 0.6)
            samples.extend([0.0] * int(SAMPLE_RATE * 0.012))
        SoundFxManager._write_wav(path, samples)

    @staticmethod
    def _write_victory(path: Path):
        # C major arpeggio up to the octave, last note held
        notes = [(261.63, 0.14), (329.63, 0.14), (392.00, 0.14), (523.25, 0.16), (392.00, 0.12), (523.25, 0.5)]
        samples = []
        elapsed = 0.0
        for freq, dur in notes:
            total = int(SAMPLE_RATE * dur)
            for i in range(total):
                t = i / SAMPLE_RATE
                env = min(1.0, t * 20.0) * math.exp(-3.0 * t)
                s1 = math.sin(2.0 * math.pi * freq * (elapsed + t))
                s2 = math.sin(2.0 * math.pi * (freq * 2.0) * (elapsed + t)) * 0.2
                samples.append((s1 + s2) * env * 0.4)
            gap = int(SAMPLE_RATE * 0.02)
            samples.extend([0.0] * gap)
            elapsed += dur + 0.02
        SoundFxManager._write_wav(path, samples)


# (root Hz, chord intervals in semitones) per bar: C, Am, F, G
MUSIC_BARS = [(261.63, (0, 4, 7)), (220.00, (0, 3, 7)), (174.61, (0, 4, 7)), (196.00, (0, 4, 7))]
MUSIC_BAR_SEC = 2.0
MUSIC_VOLUME = 0.25


class MusicPlayer:
    """
    Background loop. The track is generated once next to the sound effects and replayed
    by a daemon thread until stop() or until music is switched off.
    """

    def __init__(self, enabled=True, path: Path = None):
        self.path = path if path is not None else ASSET_DIR / "music.wav"
        self._enabled = enabled
        self._player = which("paplay") or which("aplay") or which("afplay")
        self._stop = threading.Event()
        self._lock = threading.Lock()
        self._thread = None
        self._process = None
        try:
            if not self.path.exists():
                self.path.parent.mkdir(parents=True, exist_ok=True)
                self._write_music(self.path)
        except Exception:
            self._enabled = False

    @property
    def enabled(self):
        return self._enabled

    @enabled.setter
    def enabled(self, value):
        self._enabled = bool(value)
        if self._enabled:
            self.start()
        else:
            self.stop()

    @property
    def playing(self):
        return self._thread is not None and self._thread.is_alive()

    def start(self):
        if not self._enabled or self.playing or not self.path.exists():
            return
        if sys.platform == "win32":
            try:
                import winsound

                winsound.PlaySound(str(self.path), winsound.SND_ASYNC | winsound.SND_FILENAME | winsound.SND_LOOP)
            except Exception:
                return
            return
        if self._player is None:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="music", daemon=True)
        self._thread.start()

    def stop(self):
        self._stop.set()
        if sys.platform == "win32":
            try:
                import winsound

                winsound.PlaySound(None, 0)
            except Exception:
                pass
        with self._lock:
            if self._process is not None and self._process.poll() is None:
                self._process.terminate()
        if self._thread is not None:
            self._thread.join(timeout=1.0)
        self._thread = None

    def _run(self):
        while not self._stop.is_set():
            with self._lock:
                if self._stop.is_set():
                    return
                try:
                    self._process = subprocess.Popen([self._player, str(self.path)],
                                                     stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
                except Exception:
                    return
            # give up when the player fails
            if self._process.wait() != 0:
                return

    @staticmethod
    def _write_music(path: Path):
        samples = []
        step = MUSIC_BAR_SEC / 8
        for root, chord in MUSIC_BARS:
            pad = [root * 2 ** (semi / 12.0) for semi in chord]
            arpeggio = [f * 2.0 for f in pad] + [pad[1] * 2.0, pad[2] * 2.0, pad[0] * 4.0, pad[2] * 2.0, pad[1] * 2.0]
            for note in arpeggio:
                total = int(SAMPLE_RATE * step)
                for i in range(total):
                    t = i / SAMPLE_RATE
                    env = min(1.0, t * 40.0) * math.exp(-4.0 * t)
                    s = math.sin(2.0 * math.pi * note * t) * env * 0.5
                    # pad phase follows the track clock, not the note
                    clock = len(samples) / SAMPLE_RATE
                    s += sum(math.sin(2.0 * math.pi * (f / 2.0) * clock) for f in pad) * 0.12
                    samples.append(s * MUSIC_VOLUME)
        SoundFxManager._write_wav(path, samples)
