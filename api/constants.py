from collections import Counter
from typing import Dict, List, Tuple

CENSUS_API_BASE_URL = 'https://api.census.gov/data'

POPULATION_ENDPOINT = '/2023/pep/population'
ACS_ENDPOINT = '/2022/acs/acs5'
ACS_PROFILE_ENDPOINT = '/2022/acs/acs5/profile'

POPULATION_VARIABLES = ['POP_2023', 'NAME']
ACS_ECONOMIC_VARIABLES = [
    'NAME',
    'B19013_001E',            # Median household income
    'DP03_0005PE'             # Unemployment rate
]
RACE_VARIABLES = [
    'NAME',
    'DP05_0077PE',            # Hispanic or Latino (of any race)
    'DP05_0071PE',            # White alone, not Hispanic
    'DP05_0078PE',            # Black or African American alone
    'DP05_0080PE'             # Asian alone
]

# B01001 sex by age: 23 male bands (003-025) then 23 female bands (027-049)
MALE_AGE_VARIABLES = [f'B01001_{n:03d}E' for n in range(3, 26)]
FEMALE_AGE_VARIABLES = [f'B01001_{n:03d}E' for n in range(27, 50)]

# Bucket label -> positions within each 23-column half.
# 0:<5 1:5-9 2:10-14 3:15-17 4:18-19 5:20 6:21 7:22-24 8:25-29 9:30-34
# 10:35-39 11:40-44 12:45-49 13:50-54 14:55-59 15:60-61 16:62-64
# 17:65-66 18:67-69 19:70-74 20:75-79 21:80-84 22:85+
AGE_BUCKETS: Tuple[Tuple[str, Tuple[int, ...]], ...] = (
    ('0-4', (0,)),
    ('5-17', (1, 2, 3)),
    ('18-24', (4, 5, 6, 7)),
    ('25-34', (8, 9)),
    ('35-44', (10, 11)),
    ('45-54', (12, 13)),
    ('55-64', (14, 15, 16)),
    ('65-74', (17, 18, 19)),
    ('75+', (20, 21, 22)),
)

RACE_COLORS: Dict[str, str] = {
    'white': '#3b82f6',
    'hispanic': '#f59e0b',
    'black': '#10b981',
    'asian': '#ef4444',
    'other': '#8b5cf6',
}

STATE_ABBREVIATIONS: Dict[str, str] = {
    'Alabama': 'AL', 'Alaska': 'AK', 'Arizona': 'AZ', 'Arkansas': 'AR',
    'California': 'CA', 'Colorado': 'CO', 'Connecticut': 'CT', 'Delaware': 'DE',
    'District of Columbia': 'DC', 'Florida': 'FL', 'Georgia': 'GA', 'Hawaii': 'HI',
    'Idaho': 'ID', 'Illinois': 'IL', 'Indiana': 'IN', 'Iowa': 'IA',
    'Kansas': 'KS', 'Kentucky': 'KY', 'Louisiana': 'LA', 'Maine': 'ME',
    'Maryland': 'MD', 'Massachusetts': 'MA', 'Michigan': 'MI', 'Minnesota': 'MN',
    'Mississippi': 'MS', 'Missouri': 'MO', 'Montana': 'MT', 'Nebraska': 'NE',
    'Nevada': 'NV', 'New Hampshire': 'NH', 'New Jersey': 'NJ', 'New Mexico': 'NM',
    'New York': 'NY', 'North Carolina': 'NC', 'North Dakota': 'ND', 'Ohio': 'OH',
    'Oklahoma': 'OK', 'Oregon': 'OR', 'Pennsylvania': 'PA', 'Rhode Island': 'RI',
    'South Carolina': 'SC', 'South Dakota': 'SD', 'Tennessee': 'TN', 'Texas': 'TX',
    'Utah': 'UT', 'Vermont': 'VT', 'Virginia': 'VA', 'Washington': 'WA',
    'West Virginia': 'WV', 'Wisconsin': 'WI', 'Wyoming': 'WY', 'Puerto Rico': 'PR',
}

# Placeholder until a year-over-year source exists
PLACEHOLDER_GROWTH = 0.5

# (year, population in millions, urban percentage)
HISTORICAL_POPULATION: Tuple[Tuple[int, float, float], ...] = (
    (1950, 151.3, 64.0),
    (1960, 179.3, 70.0),
    (1970, 203.2, 74.0),
    (1980, 226.5, 74.0),
    (1990, 248.7, 75.0),
    (2000, 281.4, 79.0),
    (2010, 308.7, 81.0),
    (2020, 331.4, 83.0),
    (2024, 336.0, 84.0),
)


def _duplicates(values) -> List:
    return [value for value, count in Counter(values).items() if count > 1]


def validate_lookup_tables() -> None:
    """Check the static tables for duplicate keys and overlapping buckets"""
    problems = []

    dup_abbrs = _duplicates(STATE_ABBREVIATIONS.values())
    if dup_abbrs:
        problems.append(f"duplicate state abbreviations: {dup_abbrs}")

    dup_labels = _duplicates(label for label, _ in AGE_BUCKETS)
    if dup_labels:
        problems.append(f"duplicate age bucket labels: {dup_labels}")

    positions = [idx for _, indices in AGE_BUCKETS for idx in indices]
    dup_positions = _duplicates(positions)
    if dup_positions:
        problems.append(f"age columns mapped to more than one bucket: {dup_positions}")
    if sorted(positions) != list(range(len(MALE_AGE_VARIABLES))):
        problems.append("age buckets do not cover every B01001 age band exactly once")

    if len(MALE_AGE_VARIABLES) != len(FEMALE_AGE_VARIABLES):
        problems.append("male and female age variable lists differ in length")

    dup_years = _duplicates(year for year, _, _ in HISTORICAL_POPULATION)
    if dup_years:
        problems.append(f"duplicate historical years: {dup_years}")

    if problems:
        raise ValueError("Invalid lookup tables: " + "; ".join(problems))


validate_lookup_tables()
