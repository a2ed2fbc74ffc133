import argparse
import curses
import threading

from klondike.Board import InvalidPilesError
from klondike.Deck import Difficulty
from klondike.Game import GameSession
from klondike.Interface import Interface
from terminal_ui import settings_store, stats_store
from terminal_ui.adapter import BoardAdapter
from terminal_ui.card_art import CardArt
from terminal_ui.sound_fx import MusicPlayer, SoundFxManager
from terminal_ui.ui_config import (CARD_WIDTH, COLUMN_GAP, FACE_DOWN_STEP, FACE_UP_STEP, FOUNDATION_X,
                                   HUD_Y, MIN_HEIGHT, MIN_WIDTH, OPTION_ITEMS, PAIR_BACK, PAIR_DEFAULT,
                                   PAIR_POINTED, PAIR_RED, PAIR_SELECTED, PAIR_TITLE, PAIR_WARNING, PAUSE_MENU_ITEMS,
                                   START_MENU_ITEMS, STOCK_X, TABLEAU_X, TABLEAU_Y, TITLE_ART, TOP_ROW_Y,
                                   WASTE_FAN_STEP, WASTE_X)
from terminal_ui.window_watcher import WindowWatcher

ESC = 27
ENTER_KEYS = (curses.KEY_ENTER, 10, 13)
ARROWS = {
    curses.KEY_UP: "up",
    curses.KEY_DOWN: "down",
    curses.KEY_LEFT: "left",
    curses.KEY_RIGHT: "right",
}
RED_SUITS = (2, 3)


def key_to_command(key):
    if key in ARROWS:
        return ARROWS[key]
    if key in ENTER_KEYS:
        return "action"
    if key == ord(" "):
        return "cancel"
    return None


def format_time(seconds):
    seconds = int(seconds)
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


class CursesInterface(Interface):

    def __init__(self, stdscr, sound_fx: SoundFxManager, art: CardArt):
        super().__init__()
        self.stdscr = stdscr
        self.sound_fx = sound_fx
        self.art = art
        self.vm = None
        self.session = None
        self.redraw_requested = threading.Event()
        self.window_available = True

    def onStart(self):
        self.vm = BoardAdapter.snapshot(self.board)
        self.sound_fx.play("start")
        self.notifyRedraw()

    def onEvent(self, event):
        self.vm = BoardAdapter.snapshot(self.board)
        key = BoardAdapter.event_to_sound(event)
        if key is not None:
            self.sound_fx.play(key)
        super().onEvent(event)

    def notifyRedraw(self):
        self.draw()

    def onWin(self):
        self.vm = BoardAdapter.snapshot(self.board)
        self.sound_fx.play("victory")

    def on_window_change(self, available):
        # watcher thread: only flag, drawing happens on the game loop
        self.window_available = available
        self.redraw_requested.set()

    # --- drawing ---

    def put(self, y, x, text, attr=0):
        try:
            self.stdscr.addstr(y, x, text, attr)
        except curses.error:
            pass

    def card_attr(self, view):
        if view is None:
            return curses.color_pair(PAIR_DEFAULT)
        if view.selected:
            return curses.color_pair(PAIR_SELECTED) | curses.A_BOLD
        if view.pointed:
            return curses.color_pair(PAIR_POINTED) | curses.A_BOLD
        if view.kind == "card" and not view.face_up:
            return curses.color_pair(PAIR_BACK)
        if view.suit in RED_SUITS:
            return curses.color_pair(PAIR_RED)
        return curses.color_pair(PAIR_DEFAULT)

    def draw_card(self, y, x, view, rows=None, attr=None):
        lines = self.art.for_view(view)
        if rows is not None:
            lines = lines[:rows]
        if attr is None:
            attr = self.card_attr(view)
        for i, line in enumerate(lines):
            self.put(y + i, x, line, attr)

    def draw_warning(self):
        self.stdscr.erase()
        self.put(0, 0, f"Please resize the terminal to at least {MIN_WIDTH}x{MIN_HEIGHT} characters.",
                 curses.color_pair(PAIR_WARNING) | curses.A_BOLD)
        self.stdscr.refresh()

    def draw(self):
        if self.vm is None:
            return
        if not self.window_available:
            self.draw_warning()
            return
        vm = self.vm
        self.stdscr.erase()
        elapsed = self.session.elapsedSeconds() if self.session is not None else 0
        self.put(HUD_Y, 1, f"{vm.difficulty} mode   Moves: {vm.moves_count}   Time: {format_time(elapsed)}   "
                           f"Stock: {vm.stock_count}   [arrows] move  [enter] select/place  [space] cancel  [esc] pause")

        row, col = vm.pointer
        if vm.stock_top is not None:
            self.draw_card(TOP_ROW_Y, STOCK_X, vm.stock_top)
        else:
            attr = curses.color_pair(PAIR_POINTED) if (row, col) == (0, 0) else None
            self.draw_card(TOP_ROW_Y, STOCK_X, None, attr=attr)

        for i, view in enumerate(vm.waste):
            self.draw_card(TOP_ROW_Y, WASTE_X + i * WASTE_FAN_STEP, view)

        for i, view in enumerate(vm.foundations):
            self.draw_card(TOP_ROW_Y, FOUNDATION_X + i * (CARD_WIDTH + 1), view)

        holding = len(vm.selected) > 0
        for c, column in enumerate(vm.tableau):
            x = TABLEAU_X + c * (CARD_WIDTH + COLUMN_GAP)
            y = TABLEAU_Y
            if len(column) == 0:
                attr = curses.color_pair(PAIR_POINTED) if row > 0 and col == c else None
                self.draw_card(y, x, None, attr=attr)
                continue
            for i, view in enumerate(column):
                last = i == len(column) - 1
                step = FACE_UP_STEP if view.face_up else FACE_DOWN_STEP
                self.draw_card(y, x, view, rows=None if last else step)
                if not last:
                    y += step
            # placeholder where a held card would land
            if holding and row > 0 and col == c and not any(v.selected for v in column):
                self.draw_card(y + FACE_UP_STEP, x, None, attr=curses.color_pair(PAIR_POINTED))
        self.stdscr.refresh()

    # --- screens ---

    def menu(self, items, selection=0, title=TITLE_ART, footer=None):
        """Blocks until Enter or Esc. Returns the chosen index, or None on Esc."""
        while True:
            self.stdscr.erase()
            top = 2
            for i, line in enumerate(title):
                self.put(top + i, 4, line, curses.color_pair(PAIR_TITLE) | curses.A_BOLD)
            y = top + len(title) + 2
            for i, item in enumerate(items):
                attr = curses.color_pair(PAIR_POINTED) | curses.A_BOLD if i == selection else 0
                self.put(y + i * 2, 6, f"  {item}  ", attr)
            if footer:
                self.put(y + len(items) * 2 + 1, 6, footer)
            self.stdscr.refresh()

            key = self.stdscr.getch()
            if key == -1:
                continue
            self.sound_fx.play("operation")
            if key == curses.KEY_UP:
                selection = (selection - 1) % len(items)
            elif key == curses.KEY_DOWN:
                selection = (selection + 1) % len(items)
            elif key in ENTER_KEYS:
                return selection
            elif key == ESC:
                return None

    def victory_screen(self, session: GameSession, best_score):
        self.stdscr.erase()
        lines = [
            "You win!",
            "",
            f"Moves:       {session.board.movesCount}",
            f"Time:        {format_time(session.elapsedSeconds())}",
            f"Total score: {session.score()}",
            f"Best score:  {best_score}",
            "",
            "Press any key to return to the menu.",
        ]
        for i, line in enumerate(lines):
            attr = curses.color_pair(PAIR_TITLE) | curses.A_BOLD if i in (0, 4) else 0
            self.put(4 + i, 6, line, attr)
        self.stdscr.refresh()
        self.stdscr.nodelay(False)
        self.stdscr.getch()


class TerminalApp:
    def __init__(self, difficulty=None, seed=None, sound=None, music=None):
        self.settings = settings_store.load_settings()
        self.stats = stats_store.load_stats()
        self.forced_difficulty = difficulty
        self.seed = seed if seed is not None else settings_store.seed_of(self.settings)
        enabled = settings_store.sound_enabled(self.settings) if sound is None else sound
        self.sound_fx = SoundFxManager(enabled=enabled)
        music_on = settings_store.music_enabled(self.settings) if music is None else music
        self.music = MusicPlayer(enabled=music_on)
        self.art = CardArt()

    def run(self, stdscr):
        curses.curs_set(0)
        curses.start_color()
        curses.use_default_colors()
        curses.init_pair(PAIR_DEFAULT, curses.COLOR_WHITE, -1)
        curses.init_pair(PAIR_RED, curses.COLOR_RED, -1)
        curses.init_pair(PAIR_POINTED, curses.COLOR_BLACK, curses.COLOR_YELLOW)
        curses.init_pair(PAIR_SELECTED, curses.COLOR_BLACK, curses.COLOR_CYAN)
        curses.init_pair(PAIR_BACK, curses.COLOR_BLUE, -1)
        curses.init_pair(PAIR_TITLE, curses.COLOR_YELLOW, -1)
        curses.init_pair(PAIR_WARNING, curses.COLOR_RED, -1)
        stdscr.keypad(True)

        ui = CursesInterface(stdscr, self.sound_fx, self.art)
        watcher = WindowWatcher(ui.on_window_change)
        ui.window_available = watcher.available
        watcher.start()
        self.music.start()
        try:
            self.main_loop(ui)
        finally:
            self.music.stop()
            watcher.stop()

    def main_loop(self, ui: CursesInterface):
        while True:
            if self.forced_difficulty is not None:
                difficulty = self.forced_difficulty
                self.forced_difficulty = None
            else:
                difficulty = self.start_menu(ui)
                if difficulty is None:
                    return
            self.play(ui, difficulty)

    def start_menu(self, ui):
        selection = 0 if self.settings["difficulty"] == "Easy" else 1
        while True:
            ui.stdscr.nodelay(False)
            choice = ui.menu(START_MENU_ITEMS, selection)
            if choice is None or choice == 3:
                return None
            if choice == 2:
                self.options_menu(ui)
                selection = 2
                continue
            difficulty = Difficulty.EASY if choice == 0 else Difficulty.HARD
            self.settings["difficulty"] = difficulty.value
            settings_store.save_settings(self.settings)
            return difficulty

    def options_menu(self, ui):
        selection = 0
        while True:
            music = "on" if self.music.enabled else "off"
            sound = "on" if self.sound_fx.enabled else "off"
            choice = ui.menu(OPTION_ITEMS, selection, title=("Options",),
                             footer=f"Music: {music}   Sound effects: {sound}")
            if choice == 0:
                self.music.enabled = not self.music.enabled
                self.settings["music"] = "on" if self.music.enabled else "off"
            elif choice == 1:
                self.sound_fx.enabled = not self.sound_fx.enabled
                self.settings["sound_fx"] = "on" if self.sound_fx.enabled else "off"
            else:
                return
            settings_store.save_settings(self.settings)
            selection = choice

    def play(self, ui: CursesInterface, difficulty: Difficulty):
        try:
            session = GameSession(difficulty, seed=self.seed, interface=ui)
        except InvalidPilesError:
            return
        ui.session = session
        self.stats = stats_store.record_game_started(self.stats, difficulty.value)
        stats_store.save_stats(self.stats)

        ui.stdscr.timeout(100)
        session.start()
        while not session.won:
            key = ui.stdscr.getch()
            if ui.redraw_requested.is_set():
                ui.redraw_requested.clear()
                if ui.window_available:
                    session.resume()
                else:
                    session.pause()
                ui.draw()
            if key == -1:
                if ui.window_available:
                    ui.draw()
                continue
            if not ui.window_available:
                continue
            if key == ESC:
                if not self.pause_menu(ui, session):
                    ui.stdscr.timeout(-1)
                    return
                ui.stdscr.timeout(100)
                ui.draw()
                continue
            command = key_to_command(key)
            if command is not None:
                session.dispatch(command)

        self.stats = stats_store.record_game_won(self.stats, difficulty.value, session.elapsedSeconds(),
                                                 session.board.movesCount, session.score())
        stats_store.save_stats(self.stats)
        ui.stdscr.timeout(-1)
        # music is silent on the victory screen
        self.music.stop()
        ui.victory_screen(session, self.stats["by_difficulty"][difficulty.value]["best_score"])
        self.music.start()

    def pause_menu(self, ui, session):
        """Returns False when the player quits the game."""
        session.pause()
        self.sound_fx.play("pause")
        ui.stdscr.timeout(-1)
        while True:
            choice = ui.menu(PAUSE_MENU_ITEMS, title=("Paused",))
            if choice == 1:
                self.options_menu(ui)
                continue
            if choice == 2:
                return False
            break
        self.sound_fx.play("resume")
        session.resume()
        return True


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Klondike solitaire for the terminal.")
    parser.add_argument("--difficulty", choices=[d.value for d in Difficulty], default=None,
                        help="skip the start menu and deal straight away")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--no-sound", action="store_true")
    parser.add_argument("--no-music", action="store_true")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    difficulty = Difficulty(args.difficulty) if args.difficulty else None
    app = TerminalApp(difficulty=difficulty, seed=args.seed, sound=False if args.no_sound else None,
                      music=False if args.no_music else None)
    curses.wrapper(app.run)


if __name__ == "__main__":
    main()
