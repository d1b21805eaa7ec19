"""Shared constants for the Discord bot helpers."""

# Display names handed out to temporary voice channels, in pool order.
# config.yaml can replace the pool; this tuple is the fallback when it doesn't.
DEFAULT_CHANNEL_NAMES: tuple[str, ...] = (
    "🛡️ 〢 Marineford",
    "⛓️ 〢 Impel Down",
    "🌳 〢 Sabaody",
    "⚖️ 〢 Enies Lobby",
    "🌊 〢 Water 7",
    "🎭 〢 Dressrosa",
    "🍰 〢 Whole Cake",
    "🎋 〢 Wano",
    "👹 〢 Onigashima",
    "🧪 〢 Egghead",
    "🏜️ 〢 Alabasta",
    "☁️ 〢 Skypiea",
    "🦇 〢 Thriller Bark",
    "🐠 〢 Fishman Island",
    "🐘 〢 Zou",
    "❄️ 〢 Drum",
    "⚡ 〢 Loguetown",
    "🍽️ 〢 Baratie",
    "🦈 〢 Arlong Park",
    "📚 〢 Ohara",
)

# Upper bound (inclusive) of the numeric suffix used once every pool name is taken.
NAME_SUFFIX_MAX = 1000

# Number of rows shown by the voice statistics report.
LEADERBOARD_LIMIT = 25

# Embed colours for the voice activity log.
COLOR_JOIN = 0x00FF00
COLOR_LEAVE = 0xFF0000
COLOR_MOVE = 0xFFFF00
COLOR_REPORT = 0x0099FF
