"""
Weight Screening Table Data
Version 1.0.0

Literal reference data for the weight-for-height screening table (AR 600-9,
Table B-1). One row per whole inch of height, 58 through 80.

Row layout:
    (height_in, min_weight_lbs,
     (male 17-20, male 21-27, male 28-39, male 40+),
     (female 17-20, female 21-27, female 28-39, female 40+))

A max value of 0 means no standard is published for that cell.
"""

from typing import List, Optional, Tuple

TABLE_VERSION = "1.0.0"
TABLE_SOURCE = "AR 600-9 Table B-1 (weight for height screening table)"

NO_DATA = 0

# ============================================================================
# AGE GROUPS
# (group number, lower bound inclusive, upper bound inclusive or None)
# ============================================================================

AGE_GROUPS: List[Tuple[int, int, Optional[int]]] = [
    (1, 17, 20),
    (2, 21, 27),
    (3, 28, 39),
    (4, 40, None),
]

MINIMUM_AGE = 17

# ============================================================================
# SCREENING TABLE
# ============================================================================

SCREENING_TABLE: List[Tuple[int, int, Tuple[int, ...], Tuple[int, ...]]] = [
    # ===== NO PUBLISHED MALE STANDARD =====
    (58, 91, (0, 0, 0, 0), (119, 121, 122, 124)),
    (59, 94, (0, 0, 0, 0), (124, 125, 126, 128)),
    # ===== FULL ROWS =====
    (60, 97, (132, 136, 139, 141), (128, 129, 131, 133)),
    (61, 100, (136, 140, 144, 146), (132, 134, 135, 137)),
    (62, 104, (141, 144, 148, 150), (136, 138, 140, 142)),
    (63, 107, (145, 149, 153, 155), (141, 143, 144, 146)),
    (64, 110, (150, 154, 158, 160), (145, 147, 149, 151)),
    (65, 114, (155, 159, 163, 165), (150, 152, 154, 156)),
    (66, 117, (160, 163, 168, 170), (155, 156, 158, 161)),
    (67, 121, (165, 169, 174, 176), (159, 161, 163, 166)),
    (68, 125, (170, 174, 179, 181), (164, 166, 168, 171)),
    (69, 128, (175, 179, 184, 186), (169, 171, 173, 176)),
    (70, 132, (180, 185, 189, 192), (174, 176, 178, 181)),
    (71, 136, (185, 189, 194, 197), (179, 181, 183, 186)),
    (72, 140, (190, 195, 200, 203), (184, 186, 188, 191)),
    (73, 144, (195, 200, 205, 208), (189, 191, 194, 197)),
    (74, 148, (201, 206, 211, 214), (194, 197, 199, 202)),
    (75, 152, (206, 212, 217, 220), (200, 202, 204, 208)),
    (76, 156, (212, 217, 223, 226), (205, 207, 210, 213)),
    (77, 160, (218, 223, 229, 232), (210, 213, 215, 219)),
    (78, 164, (223, 229, 235, 238), (216, 218, 221, 225)),
    (79, 168, (229, 235, 241, 244), (221, 224, 227, 230)),
    (80, 173, (234, 240, 247, 250), (227, 230, 233, 236)),
]

MIN_HEIGHT = 58
MAX_HEIGHT = 80
