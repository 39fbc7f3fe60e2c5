from __future__ import annotations


def is_gregorian_leap(gy: int) -> bool:
    return gy % 4 == 0 and (gy % 100 != 0 or gy % 400 == 0)


def is_jalali_leap(jy: int) -> bool:
    # Same 33-year grid the converters count on: the first year of every
    # 4-year block is leap, the 33rd year of a cycle is not.
    cycle_year = (jy - 979 if jy > 979 else jy) % 33
    return cycle_year % 4 == 0 and cycle_year < 32
