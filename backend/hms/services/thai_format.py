"""
Thai formatting for printed documents: baht amounts in words, Buddhist-era dates
"""
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Union

DIGIT_WORDS = ["", "หนึ่ง", "สอง", "สาม", "สี่", "ห้า", "หก", "เจ็ด", "แปด", "เก้า"]
PLACE_WORDS = ["", "สิบ", "ร้อย", "พัน", "หมื่น", "แสน"]

BUDDHIST_ERA_OFFSET = 543


def _read_digits(digits: str) -> str:
    """Read up to six digits: 21 -> ยี่สิบเอ็ด, 10 -> สิบ"""
    words = ""
    length = len(digits)
    for index, char in enumerate(digits):
        digit = int(char)
        place = length - 1 - index
        if digit == 0:
            continue
        if place == 1 and digit == 2:
            words += "ยี่"
        elif place == 1 and digit == 1:
            pass
        elif place == 0 and digit == 1 and length > 1 and digits[-2] != "0":
            words += "เอ็ด"
        else:
            words += DIGIT_WORDS[digit]
        words += PLACE_WORDS[place]
    return words


def _read_integer(number: int) -> str:
    millions, remainder = divmod(number, 1_000_000)
    words = ""
    if millions:
        words += _read_integer(millions) + "ล้าน"
    if remainder:
        words += _read_digits(str(remainder))
    return words


def amount_to_thai_words(amount: Union[Decimal, float, int, str]) -> str:
    """
    Baht text as printed on Thai tax invoices

    >>> amount_to_thai_words(1000)
    'หนึ่งพันบาทถ้วน'
    >>> amount_to_thai_words("21.50")
    'ยี่สิบเอ็ดบาทห้าสิบสตางค์'
    """
    value = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    prefix = "ลบ" if value < 0 else ""
    value = abs(value)

    baht = int(value)
    satang = int((value - baht) * 100)

    words = (_read_integer(baht) if baht else "ศูนย์") + "บาท"
    if satang:
        words += _read_digits(f"{satang:02d}") + "สตางค์"
    else:
        words += "ถ้วน"
    return prefix + words


def buddhist_short_date(value: date) -> str:
    """dd/mm/yy with the Buddhist-era year: 2024-06-01 -> 01/06/67"""
    year = str(value.year + BUDDHIST_ERA_OFFSET)[-2:]
    return f"{value.day:02d}/{value.month:02d}/{year}"


THAI_MONTHS_SHORT = [
    "ม.ค.", "ก.พ.", "มี.ค.", "เม.ย.", "พ.ค.", "มิ.ย.",
    "ก.ค.", "ส.ค.", "ก.ย.", "ต.ค.", "พ.ย.", "ธ.ค.",
]


def buddhist_long_date(value: date) -> str:
    """01 มิ.ย. 2567"""
    return f"{value.day:02d} {THAI_MONTHS_SHORT[value.month - 1]} {value.year + BUDDHIST_ERA_OFFSET}"
