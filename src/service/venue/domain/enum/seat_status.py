from enum import Enum


class SeatStatus(str, Enum):
    AVAILABLE = 'Available'
    SELECTED = 'Selected'
    SOLD_OUT = 'Sold Out'
    UNAVAILABLE = 'Unavailable'
