MIN_WIDTH = 96
MIN_HEIGHT = 40

CARD_WIDTH = 9
CARD_HEIGHT = 7
# rows of a covered card that stay visible in a tableau column
FACE_DOWN_STEP = 1
FACE_UP_STEP = 2
WASTE_FAN_STEP = 4
COLUMN_GAP = 3

STOCK_X = 1
WASTE_X = STOCK_X + CARD_WIDTH + COLUMN_GAP
FOUNDATION_X = WASTE_X + CARD_WIDTH + 2 * WASTE_FAN_STEP + COLUMN_GAP * 2
TOP_ROW_Y = 2
TABLEAU_X = STOCK_X
TABLEAU_Y = TOP_ROW_Y + CARD_HEIGHT + 2
HUD_Y = 0

DIFFICULTY_ORDER = ("Easy", "Hard")
START_MENU_ITEMS = ("New game - Easy mode", "New game - Hard mode", "Options", "Exit")
PAUSE_MENU_ITEMS = ("Resume", "Options", "Quit to menu")
OPTION_ITEMS = ("Music", "Sound effects", "Back")

TITLE_ART = (
    " _  _  _                 _ _ _",
    "| |/ /| | ___  _ __   __| (_) | _____",
    "| ' / | |/ _ \\| '_ \\ / _` | | |/ / _ \\",
    "| . \\ | | (_) | | | | (_| | |   <  __/",
    "|_|\\_\\|_|\\___/|_| |_|\\__,_|_|_|\\_\\___|",
)

# curses color pair ids
PAIR_DEFAULT = 1
PAIR_RED = 2
PAIR_POINTED = 3
PAIR_SELECTED = 4
PAIR_BACK = 5
PAIR_TITLE = 6
PAIR_WARNING = 7
