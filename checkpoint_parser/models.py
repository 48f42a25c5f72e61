from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .codes import UNKNOWN, UNKNOWN_AIRPORT


class BoardingPassFormat(str, Enum):
    AIR_CONGO = "AIR_CONGO"
    ETHIOPIAN = "ETHIOPIAN"
    GENERIC = "GENERIC"


class BaggageInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    count: int = Field(..., ge=1, le=10)
    base_number: str = Field(..., pattern=r"^\d{10}$")
    expected_tags: Tuple[str, ...] = ()

    @model_validator(mode="after")
    def _check_tags(self) -> "BaggageInfo":
        if len(self.expected_tags) != self.count:
            raise ValueError(
                f"expected_tags has {len(self.expected_tags)} entries for count={self.count}"
            )
        return self


class ParsedBoardingPass(BaseModel):
    """
    One decoded boarding-pass payload.

    String fields that could not be extracted hold "UNKNOWN" (airport codes
    hold "UNK"); optional fields are None. Callers must treat sentinels as
    "not extracted".
    """
    model_config = ConfigDict(frozen=True)

    pnr: str = UNKNOWN
    full_name: str = UNKNOWN
    first_name: str = UNKNOWN
    last_name: str = UNKNOWN
    flight_number: str = UNKNOWN
    flight_time: Optional[str] = Field(None, pattern=r"^\d{2}:\d{2}$")
    flight_date: Optional[str] = None
    departure: str = UNKNOWN_AIRPORT
    arrival: str = UNKNOWN_AIRPORT
    route: str = f"{UNKNOWN_AIRPORT}-{UNKNOWN_AIRPORT}"
    seat_number: Optional[str] = None
    ticket_number: Optional[str] = None
    company_code: str = UNKNOWN
    airline: str = UNKNOWN
    baggage_info: Optional[BaggageInfo] = None
    raw_data: str = ""
    format: BoardingPassFormat = BoardingPassFormat.GENERIC


class BaggageTagData(BaseModel):
    model_config = ConfigDict(frozen=True)

    passenger_name: str = UNKNOWN
    rfid_tag: str
    flight_number: Optional[str] = None
    flight_date: Optional[str] = None
    pnr: Optional[str] = None
    origin: Optional[str] = None
    destination: Optional[str] = None
    baggage_sequence: Optional[int] = None
    baggage_count: Optional[int] = None
    raw_data: str = ""


class ManifestLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    bag_id: str
    pax_surname: str
    pnr: str
    route: str
    origin: str = UNKNOWN_AIRPORT
    destination: str = UNKNOWN_AIRPORT
