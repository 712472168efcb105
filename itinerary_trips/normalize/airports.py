"""IATA code lookup: city name and time zone for airports and rail hubs."""

from dataclasses import dataclass
from typing import Dict, Optional, Protocol, Tuple


@dataclass(frozen=True)
class Airport:
    iata: str
    city: str
    tz_name: str


class LocationResolver(Protocol):
    """Anything that can map a 3-letter code to a location."""

    def resolve(self, iata_code: str) -> Optional[Airport]:
        ...


# Maps IATA code → (city, IANA time zone)
_AIRPORTS: Dict[str, Tuple[str, str]] = {
    # --- Spain ---
    "MAD": ("Madrid", "Europe/Madrid"),
    "BCN": ("Barcelona", "Europe/Madrid"),
    "AGP": ("Malaga", "Europe/Madrid"),
    "SVQ": ("Seville", "Europe/Madrid"),
    "VLC": ("Valencia", "Europe/Madrid"),
    "BIO": ("Bilbao", "Europe/Madrid"),
    "PMI": ("Palma de Mallorca", "Europe/Madrid"),
    "TFN": ("Tenerife North", "Atlantic/Canary"),
    "LPA": ("Las Palmas", "Atlantic/Canary"),
    # --- Rest of Europe ---
    "LHR": ("London", "Europe/London"),
    "LGW": ("London", "Europe/London"),
    "STN": ("London", "Europe/London"),
    "DUB": ("Dublin", "Europe/Dublin"),
    "EDI": ("Edinburgh", "Europe/London"),
    "CDG": ("Paris", "Europe/Paris"),
    "ORY": ("Paris", "Europe/Paris"),
    "BOD": ("Bordeaux", "Europe/Paris"),
    "NCE": ("Nice", "Europe/Paris"),
    "LIS": ("Lisbon", "Europe/Lisbon"),
    "OPO": ("Porto", "Europe/Lisbon"),
    "AMS": ("Amsterdam", "Europe/Amsterdam"),
    "BRU": ("Brussels", "Europe/Brussels"),
    "FRA": ("Frankfurt", "Europe/Berlin"),
    "MUC": ("Munich", "Europe/Berlin"),
    "BER": ("Berlin", "Europe/Berlin"),
    "HAM": ("Hamburg", "Europe/Berlin"),
    "ZRH": ("Zurich", "Europe/Zurich"),
    "GVA": ("Geneva", "Europe/Zurich"),
    "VIE": ("Vienna", "Europe/Vienna"),
    "PRG": ("Prague", "Europe/Prague"),
    "BUD": ("Budapest", "Europe/Budapest"),
    "WAW": ("Warsaw", "Europe/Warsaw"),
    "CPH": ("Copenhagen", "Europe/Copenhagen"),
    "ARN": ("Stockholm", "Europe/Stockholm"),
    "OSL": ("Oslo", "Europe/Oslo"),
    "HEL": ("Helsinki", "Europe/Helsinki"),
    "FCO": ("Rome", "Europe/Rome"),
    "MXP": ("Milan", "Europe/Rome"),
    "LIN": ("Milan", "Europe/Rome"),
    "ATH": ("Athens", "Europe/Athens"),
    "IST": ("Istanbul", "Europe/Istanbul"),
    "MLA": ("Valletta", "Europe/Malta"),
    "KEF": ("Reykjavik", "Atlantic/Reykjavik"),
    "TLV": ("Tel Aviv", "Asia/Jerusalem"),
    # --- Americas ---
    "JFK": ("New York", "America/New_York"),
    "EWR": ("New York", "America/New_York"),
    "LGA": ("New York", "America/New_York"),
    "NYC": ("New York", "America/New_York"),
    "BOS": ("Boston", "America/New_York"),
    "IAD": ("Washington DC", "America/New_York"),
    "MIA": ("Miami", "America/New_York"),
    "ATL": ("Atlanta", "America/New_York"),
    "ORD": ("Chicago", "America/Chicago"),
    "AUS": ("Austin", "America/Chicago"),
    "DEN": ("Denver", "America/Denver"),
    "SLC": ("Salt Lake City", "America/Denver"),
    "LAX": ("Los Angeles", "America/Los_Angeles"),
    "SFO": ("San Francisco", "America/Los_Angeles"),
    "SEA": ("Seattle", "America/Los_Angeles"),
    "SAN": ("San Diego", "America/Los_Angeles"),
    "YYZ": ("Toronto", "America/Toronto"),
    "YVR": ("Vancouver", "America/Vancouver"),
    "MEX": ("Mexico City", "America/Mexico_City"),
    "GRU": ("Sao Paulo", "America/Sao_Paulo"),
    "GIG": ("Rio de Janeiro", "America/Sao_Paulo"),
    "EZE": ("Buenos Aires", "America/Argentina/Buenos_Aires"),
    "SJU": ("San Juan", "America/Puerto_Rico"),
    # --- Asia / Pacific ---
    "DXB": ("Dubai", "Asia/Dubai"),
    "DOH": ("Doha", "Asia/Qatar"),
    "DEL": ("Delhi", "Asia/Kolkata"),
    "BKK": ("Bangkok", "Asia/Bangkok"),
    "SIN": ("Singapore", "Asia/Singapore"),
    "HKG": ("Hong Kong", "Asia/Hong_Kong"),
    "PVG": ("Shanghai", "Asia/Shanghai"),
    "PEK": ("Beijing", "Asia/Shanghai"),
    "ICN": ("Seoul", "Asia/Seoul"),
    "HND": ("Tokyo", "Asia/Tokyo"),
    "NRT": ("Tokyo", "Asia/Tokyo"),
    "SYD": ("Sydney", "Australia/Sydney"),
    "MEL": ("Melbourne", "Australia/Melbourne"),
    "AKL": ("Auckland", "Pacific/Auckland"),
}


class AirportTable:
    """Static IATA table; codes are matched case-insensitively."""

    def __init__(self, extra: Optional[Dict[str, Tuple[str, str]]] = None):
        self._entries = dict(_AIRPORTS)
        for code, entry in (extra or {}).items():
            self._entries[code.upper()] = entry

    def resolve(self, iata_code: str) -> Optional[Airport]:
        if not iata_code:
            return None
        code = iata_code.strip().upper()
        entry = self._entries.get(code)
        if entry is None:
            return None
        city, tz_name = entry
        return Airport(iata=code, city=city, tz_name=tz_name)

    def __len__(self):
        return len(self._entries)

    def __contains__(self, iata_code: str) -> bool:
        return self.resolve(iata_code) is not None


def iata_to_city(iata_code: str) -> Optional[str]:
    """Return the city name for a code, or None if unknown."""
    airport = AirportTable().resolve(iata_code)
    return airport.city if airport else None
