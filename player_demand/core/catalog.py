"""Static reference data: tracked players, priority markets and approved merch terms."""

from __future__ import annotations

from typing import Dict, List

from player_demand.core.models import Market

# DataForSEO location codes for the markets the dashboard knows about.
LOCATION_CODES: Dict[str, int] = {
    "United States": 2840,
    "United Kingdom": 2826,
    "Germany": 2276,
    "Spain": 2724,
    "France": 2250,
    "Italy": 2380,
    "Brazil": 2076,
    "Mexico": 2484,
    "Canada": 2124,
    "Australia": 2036,
}

PRIORITY_MARKET_NAMES = (
    "United Kingdom",
    "United States",
    "Canada",
    "Australia",
    "Germany",
    "Mexico",
)

APPROVED_MERCH_TERMS = (
    "shirt",
    "jersey",
    "signed shirt",
    "signed jersey",
    "signed",
    "autograph",
    "autographed",
    "memorabilia",
    "boots",
    "cleats",
    "card",
    "poster",
    "signed photo",
    "authentic",
    "official",
    "framed",
    "signed ball",
    "collectibles",
    "autographed shirt",
    "autographed jersey",
    "signature",
    "coins",
    "exclusive",
    "dedication",
    "artwork",
    "signed art",
    "sports memorabilia",
    "soccer memorabilia",
    "football memorabilia",
    "limited edition",
)

PLAYER_METADATA: Dict[str, Dict[str, object]] = {
    "Federico Valverde": {"age": 26, "position": "CM", "current_team": "Real Madrid", "nationality": "Uruguay"},
    "Thibaut Courtois": {"age": 32, "position": "GK", "current_team": "Real Madrid", "nationality": "Belgium"},
    "Dean Huijsen": {"age": 19, "position": "CB", "current_team": "Bournemouth", "nationality": "Spain"},
    "Arda Guler": {"age": 19, "position": "CAM", "current_team": "Real Madrid", "nationality": "Turkey"},
    "Pedri": {"age": 22, "position": "CM", "current_team": "Barcelona", "nationality": "Spain"},
    "Gavi": {"age": 20, "position": "CM", "current_team": "Barcelona", "nationality": "Spain"},
    "Raphinha": {"age": 28, "position": "RW", "current_team": "Barcelona", "nationality": "Brazil"},
    "Florian Wirtz": {"age": 21, "position": "CAM", "current_team": "Bayer Leverkusen", "nationality": "Germany"},
    "Jurgen Klopp": {"age": 57, "position": "Manager", "current_team": "Retired", "nationality": "Germany"},
    "Virgil Van Dijk": {"age": 33, "position": "CB", "current_team": "Liverpool", "nationality": "Netherlands"},
    "Alexis Mac Allister": {"age": 26, "position": "CM", "current_team": "Liverpool", "nationality": "Argentina"},
    "Cody Gakpo": {"age": 25, "position": "LW", "current_team": "Liverpool", "nationality": "Netherlands"},
    "Wataru Endo": {"age": 31, "position": "CDM", "current_team": "Liverpool", "nationality": "Japan"},
    "Rio Ngumoha": {"age": 16, "position": "LW", "current_team": "Liverpool", "nationality": "England"},
    "Martin Odegaard": {"age": 26, "position": "CAM", "current_team": "Arsenal", "nationality": "Norway"},
    "Bukayo Saka": {"age": 23, "position": "RW", "current_team": "Arsenal", "nationality": "England"},
    "Viktor Gyokeres": {"age": 26, "position": "ST", "current_team": "Sporting CP", "nationality": "Sweden"},
    "Ethan Nwaneri": {"age": 17, "position": "CAM", "current_team": "Arsenal", "nationality": "England"},
    "Max Dowman": {"age": 14, "position": "CAM", "current_team": "Arsenal", "nationality": "England"},
    "James Maddison": {"age": 28, "position": "CAM", "current_team": "Tottenham", "nationality": "England"},
    "Dominic Solanke": {"age": 27, "position": "ST", "current_team": "Tottenham", "nationality": "England"},
    "Mohammed Kudus": {"age": 24, "position": "RW", "current_team": "West Ham", "nationality": "Ghana"},
    "Dejan Kulusevski": {"age": 24, "position": "RW", "current_team": "Tottenham", "nationality": "Sweden"},
    "Brennan Johnson": {"age": 23, "position": "RW", "current_team": "Tottenham", "nationality": "Wales"},
    "Micky Van De Ven": {"age": 23, "position": "CB", "current_team": "Tottenham", "nationality": "Netherlands"},
    "Hugo Lloris": {"age": 38, "position": "GK", "current_team": "Retired", "nationality": "France"},
    "Cole Palmer": {"age": 22, "position": "CAM", "current_team": "Chelsea", "nationality": "England"},
    "Enzo Fernandez": {"age": 24, "position": "CM", "current_team": "Chelsea", "nationality": "Argentina"},
    "Reece James": {"age": 25, "position": "RB", "current_team": "Chelsea", "nationality": "England"},
    "Joao Pedro": {"age": 23, "position": "ST", "current_team": "Brighton", "nationality": "Brazil"},
    "Omar Marmoush": {"age": 25, "position": "ST", "current_team": "Eintracht Frankfurt", "nationality": "Egypt"},
    "Jack Grealish": {"age": 29, "position": "LW", "current_team": "Manchester City", "nationality": "England"},
    "Phil Foden": {"age": 24, "position": "RW", "current_team": "Manchester City", "nationality": "England"},
    "Alexander Isak": {"age": 25, "position": "ST", "current_team": "Newcastle", "nationality": "Sweden"},
    "Ollie Watkins": {"age": 29, "position": "ST", "current_team": "Aston Villa", "nationality": "England"},
    "Morgan Rogers": {"age": 22, "position": "CAM", "current_team": "Aston Villa", "nationality": "England"},
    "Eberechi Eze": {"age": 26, "position": "CAM", "current_team": "Crystal Palace", "nationality": "England"},
    "Jean-Philippe Mateta": {"age": 27, "position": "ST", "current_team": "Crystal Palace", "nationality": "France"},
    "Adam Wharton": {"age": 20, "position": "CM", "current_team": "Crystal Palace", "nationality": "England"},
    "Marc Guehi": {"age": 24, "position": "CB", "current_team": "Crystal Palace", "nationality": "England"},
    "Raul Jiminez": {"age": 33, "position": "ST", "current_team": "Fulham", "nationality": "Mexico"},
    "Iliman Ndiaye": {"age": 24, "position": "RW", "current_team": "Everton", "nationality": "Senegal"},
    "Jordan Pickford": {"age": 30, "position": "GK", "current_team": "Everton", "nationality": "England"},
    "Kaoru Mitoma": {"age": 27, "position": "LW", "current_team": "Brighton", "nationality": "Japan"},
    "Lewis Dunk": {"age": 33, "position": "CB", "current_team": "Brighton", "nationality": "England"},
    "Daniel James": {"age": 27, "position": "RW", "current_team": "Leeds", "nationality": "Wales"},
    "Wilfried Gnonto": {"age": 21, "position": "RW", "current_team": "Leeds", "nationality": "Italy"},
    "Hwang Hee Chan": {"age": 28, "position": "ST", "current_team": "Wolves", "nationality": "South Korea"},
    "Justin Kluivert": {"age": 25, "position": "RW", "current_team": "Bournemouth", "nationality": "Netherlands"},
    "Jordan Henderson": {"age": 34, "position": "CM", "current_team": "Ajax", "nationality": "England"},
    "Kyle Walker": {"age": 34, "position": "RB", "current_team": "Manchester City", "nationality": "England"},
    "Chris Wood": {"age": 33, "position": "ST", "current_team": "Nottingham Forest", "nationality": "New Zealand"},
    "Morgan Gibbs-White": {"age": 24, "position": "CAM", "current_team": "Nottingham Forest", "nationality": "England"},
    "Jamal Musiala": {"age": 21, "position": "CAM", "current_team": "Bayern Munich", "nationality": "Germany"},
    "Alphonso Davies": {"age": 24, "position": "LB", "current_team": "Bayern Munich", "nationality": "Canada"},
    "Ousmane Dembele": {"age": 27, "position": "RW", "current_team": "PSG", "nationality": "France"},
    "Khvicha Kvaratskhelia": {"age": 23, "position": "LW", "current_team": "PSG", "nationality": "Georgia"},
    "Achraf Hakimi": {"age": 26, "position": "RB", "current_team": "PSG", "nationality": "Morocco"},
    "Desire Doue": {"age": 19, "position": "LW", "current_team": "PSG", "nationality": "France"},
    "Vitinha": {"age": 24, "position": "CM", "current_team": "PSG", "nationality": "Portugal"},
    "Jonathan David": {"age": 25, "position": "ST", "current_team": "Lille", "nationality": "Canada"},
    "Paulo Dybala": {"age": 31, "position": "CAM", "current_team": "Roma", "nationality": "Argentina"},
    "Evan Ferguson": {"age": 20, "position": "ST", "current_team": "Brighton", "nationality": "Ireland"},
    "Lucy Bronze": {"age": 33, "position": "RB", "current_team": "Chelsea Women", "nationality": "England"},
    "Mary Earps": {"age": 31, "position": "GK", "current_team": "PSG Women", "nationality": "England"},
    "Lauren James": {"age": 23, "position": "RW", "current_team": "Chelsea Women", "nationality": "England"},
    "Toni Kroos": {"age": 35, "position": "CM", "current_team": "Retired", "nationality": "Germany"},
    "Jürgen Klinsmann": {"age": 60, "position": "Manager", "current_team": "Retired", "nationality": "Germany"},
    "Henrik Larsson": {"age": 53, "position": "ST", "current_team": "Retired", "nationality": "Sweden"},
    "Marcelo Vieira": {"age": 36, "position": "LB", "current_team": "Retired", "nationality": "Brazil"},
    "Nico Williams": {"age": 22, "position": "RW", "current_team": "Athletic Bilbao", "nationality": "Spain"},
    "Jude Bellingham": {"age": 21, "position": "CM", "current_team": "Real Madrid", "nationality": "England"},
    "Antoine Griezmann": {"age": 33, "position": "ST", "current_team": "Atletico Madrid", "nationality": "France"},
    "Lee Kang-in": {"age": 23, "position": "CAM", "current_team": "PSG", "nationality": "South Korea"},
    "Bradley Barcola": {"age": 22, "position": "LW", "current_team": "PSG", "nationality": "France"},
    "Michael Olise": {"age": 23, "position": "RW", "current_team": "Bayern Munich", "nationality": "France"},
    "Xavi Simons": {"age": 21, "position": "CAM", "current_team": "RB Leipzig", "nationality": "Netherlands"},
    "Rafael Leão": {"age": 25, "position": "LW", "current_team": "AC Milan", "nationality": "Portugal"},
    "Ademola Lookman": {"age": 27, "position": "RW", "current_team": "Atalanta", "nationality": "Nigeria"},
    "Ivan Perišić": {"age": 35, "position": "LW", "current_team": "PSV", "nationality": "Croatia"},
    "Gabriel Martinelli": {"age": 23, "position": "LW", "current_team": "Arsenal", "nationality": "Brazil"},
    "Gabriel Batistuta": {"age": 55, "position": "ST", "current_team": "Retired", "nationality": "Argentina"},
    "Robert Lewandowski": {"age": 36, "position": "ST", "current_team": "Barcelona", "nationality": "Poland"},
    "Robin van Persie": {"age": 41, "position": "ST", "current_team": "Retired", "nationality": "Netherlands"},
    "Nemanja Vidić": {"age": 43, "position": "CB", "current_team": "Retired", "nationality": "Serbia"},
    "Joe Cole": {"age": 43, "position": "CAM", "current_team": "Retired", "nationality": "England"},
    "Peter Crouch": {"age": 43, "position": "ST", "current_team": "Retired", "nationality": "England"},
    "Jamie Vardy": {"age": 38, "position": "ST", "current_team": "Leicester", "nationality": "England"},
    "Jermain Defoe": {"age": 42, "position": "ST", "current_team": "Retired", "nationality": "England"},
    "Carles Puyol": {"age": 46, "position": "CB", "current_team": "Retired", "nationality": "Spain"},
    "Arjen Robben": {"age": 41, "position": "RW", "current_team": "Retired", "nationality": "Netherlands"},
    "Franck Ribéry": {"age": 41, "position": "LW", "current_team": "Retired", "nationality": "France"},
    "Thomas Müller": {"age": 35, "position": "CAM", "current_team": "Bayern Munich", "nationality": "Germany"},
    "Eden Hazard": {"age": 34, "position": "LW", "current_team": "Retired", "nationality": "Belgium"},
    "David de Gea": {"age": 34, "position": "GK", "current_team": "Retired", "nationality": "Spain"},
    "Dominik Szoboszlai": {"age": 24, "position": "CAM", "current_team": "Liverpool", "nationality": "Hungary"},
    "Roberto Firmino": {"age": 33, "position": "ST", "current_team": "Al Ahli", "nationality": "Brazil"},
    "Hidetoshi Nakata": {"age": 48, "position": "CAM", "current_team": "Retired", "nationality": "Japan"},
    "Kyogo Furuhashi": {"age": 30, "position": "ST", "current_team": "Celtic", "nationality": "Japan"},
    "Ji-Sung Park": {"age": 43, "position": "CM", "current_team": "Retired", "nationality": "South Korea"},
    "Dani Olmo": {"age": 26, "position": "CAM", "current_team": "Barcelona", "nationality": "Spain"},
    "Liam Delap": {"age": 21, "position": "ST", "current_team": "Ipswich", "nationality": "England"},
    "Eduardo Camavinga": {"age": 22, "position": "CM", "current_team": "Real Madrid", "nationality": "France"},
    "Destiny Udogie": {"age": 22, "position": "LB", "current_team": "Tottenham", "nationality": "Italy"},
    "Joako Gvardiol": {"age": 22, "position": "CB", "current_team": "Manchester City", "nationality": "Croatia"},
    "Nuno Mendes": {"age": 22, "position": "LB", "current_team": "PSG", "nationality": "Portugal"},
    "Moises Caicedo": {"age": 23, "position": "CDM", "current_team": "Chelsea", "nationality": "Ecuador"},
    "William Saliba": {"age": 23, "position": "CB", "current_team": "Arsenal", "nationality": "France"},
    "Rodrygo": {"age": 24, "position": "RW", "current_team": "Real Madrid", "nationality": "Brazil"},
    "Jeremie Frimpong": {"age": 24, "position": "RWB", "current_team": "Bayer Leverkusen", "nationality": "Netherlands"},
    "Jadon Sancho": {"age": 24, "position": "LW", "current_team": "Chelsea", "nationality": "England"},
    "Vini Jr.": {"age": 24, "position": "LW", "current_team": "Real Madrid", "nationality": "Brazil"},
    "Aurelien Tchouameni": {"age": 25, "position": "CDM", "current_team": "Real Madrid", "nationality": "France"},
    "Sandro Tonali": {"age": 24, "position": "CM", "current_team": "Newcastle", "nationality": "Italy"},
    "Diogo Costa": {"age": 25, "position": "GK", "current_team": "FC Porto", "nationality": "Portugal"},
    "Sven Botman": {"age": 25, "position": "CB", "current_team": "Newcastle", "nationality": "Netherlands"},
    "Declan Rice": {"age": 26, "position": "CDM", "current_team": "Arsenal", "nationality": "England"},
    "Kai Havertz": {"age": 25, "position": "CAM", "current_team": "Arsenal", "nationality": "Germany"},
    "Gianluigi Donnarumma": {"age": 25, "position": "GK", "current_team": "PSG", "nationality": "Italy"},
    "Alessandro Bastoni": {"age": 25, "position": "CB", "current_team": "Inter Milan", "nationality": "Italy"},
    "Trent Alexander-Arnold": {"age": 26, "position": "RB", "current_team": "Liverpool", "nationality": "England"},
    "Jarrod Bowen": {"age": 28, "position": "RW", "current_team": "West Ham", "nationality": "England"},
    "Lautaro Martinez": {"age": 27, "position": "ST", "current_team": "Inter Milan", "nationality": "Argentina"},
    "Nicolo Barella": {"age": 27, "position": "CM", "current_team": "Inter Milan", "nationality": "Italy"},
    "John McGinn": {"age": 30, "position": "CM", "current_team": "Aston Villa", "nationality": "Scotland"},
}

PLAYER_NAMES: List[str] = list(PLAYER_METADATA)


def priority_markets() -> List[Market]:
    return [Market(name, LOCATION_CODES[name]) for name in PRIORITY_MARKET_NAMES]


def markets_by_code(location_codes) -> List[Market]:
    """Map raw location codes back to named markets, once per code and in order.

    Unknown codes keep their number as the name.
    """
    names = {code: name for name, code in LOCATION_CODES.items()}
    codes = list(dict.fromkeys(int(code) for code in location_codes))
    return [Market(names.get(code, str(code)), code) for code in codes]


def player_metadata(name: str) -> Dict[str, object]:
    return dict(PLAYER_METADATA.get(name, {}))
