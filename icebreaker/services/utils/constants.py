NAME_PLACEHOLDER = "there"

# Tokens a scraper (or a naive "first + last" join) emits when the parts are missing.
DEGENERATE_NAME_TOKENS = {"undefined", "null", "none", "nan"}
MIN_NAME_LENGTH = 2

MAX_POSTS = 3
MAX_EXPERIENCE = 3
MAX_EDUCATION = 3
ABOUT_MAX_CHARS = 500

# An offer shorter than this (after trimming) switches to pure-networking mode.
OFFER_MIN_CHARS = 5
NETWORKING_WORD_LIMIT = 50
SALES_WORD_LIMIT = 90

MODE_SALES_BRIDGE = "sales_bridge"
MODE_PURE_NETWORKING = "pure_networking"

SIGNAL_MENU = [
    (
        "Company news",
        "funding rounds, acquisitions, launches, awards or growth metrics for their company",
    ),
    (
        "Recent post",
        "the main insight of one of their latest posts; quote or paraphrase it",
    ),
    (
        "Career history",
        "a venture they founded, an exit, or a notable role transition in their experience",
    ),
    (
        "Role inference",
        "what their headline or current role implies they care about right now",
    ),
    (
        "External signal",
        "a fact supplied in the custom instructions (only if one is present there)",
    ),
]

BASE_BANLIST = [
    "hope you are well",
    "hope you're doing well",
    "hope this finds you well",
    "i noticed you haven't posted",
    "haven't been active",
    "i came across your profile",
    "pick your brain",
    "synergy",
    "leverage",
    "game-changer",
    "circle back",
    "touch base",
    "win-win",
]

JSON_OUTPUT_SHAPE = """{
  "strategy": "e.g. Company News / Recent Post / Past Venture",
  "signal_used": "the one fact you built the message on",
  "icebreaker": "The 1-sentence specific observation",
  "message": "Hi <FIRST_NAME>, ..."
}"""
