# standings/data/seed_teams.py
from typing import List, Tuple

from standings.models.enums import Conference
from standings.models.team import SeedTeam

ESPN_LOGO_URL = "https://a.espncdn.com/i/teamlogos/nba/500/{abbr}.png"

_EAST = Conference.EAST
_WEST = Conference.WEST

# (canonical name, ESPN logo abbreviation, conference)
_FRANCHISES: Tuple[Tuple[str, str, Conference], ...] = (
    ("Atlanta Hawks", "atl", _EAST),
    ("Boston Celtics", "bos", _EAST),
    ("Brooklyn Nets", "bkn", _EAST),
    ("Charlotte Hornets", "cha", _EAST),
    ("Chicago Bulls", "chi", _EAST),
    ("Cleveland Cavaliers", "cle", _EAST),
    ("Detroit Pistons", "det", _EAST),
    ("Indiana Pacers", "ind", _EAST),
    ("Miami Heat", "mia", _EAST),
    ("Milwaukee Bucks", "mil", _EAST),
    ("New York Knicks", "ny", _EAST),
    ("Orlando Magic", "orl", _EAST),
    ("Philadelphia 76ers", "phi", _EAST),
    ("Toronto Raptors", "tor", _EAST),
    ("Washington Wizards", "wsh", _EAST),
    ("Dallas Mavericks", "dal", _WEST),
    ("Denver Nuggets", "den", _WEST),
    ("Golden State Warriors", "gs", _WEST),
    ("Houston Rockets", "hou", _WEST),
    ("Los Angeles Clippers", "lac", _WEST),
    ("Los Angeles Lakers", "lal", _WEST),
    ("Memphis Grizzlies", "mem", _WEST),
    ("Minnesota Timberwolves", "min", _WEST),
    ("New Orleans Pelicans", "no", _WEST),
    ("Oklahoma City Thunder", "okc", _WEST),
    ("Phoenix Suns", "phx", _WEST),
    ("Portland Trail Blazers", "por", _WEST),
    ("Sacramento Kings", "sac", _WEST),
    ("San Antonio Spurs", "sa", _WEST),
    ("Utah Jazz", "utah", _WEST),
)

SEED_TEAMS: List[SeedTeam] = [
    SeedTeam(name=name, logo=ESPN_LOGO_URL.format(abbr=abbr), conference=conference)
    for name, abbr, conference in _FRANCHISES
]
