from dataclasses import dataclass
from typing import Dict, Any


@dataclass
class StatePopulationRecord:
    """One row of the population estimates dataset"""
    state: str
    population: int
    state_code: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state": self.state,
            "population": self.population,
            "stateCode": self.state_code
        }


@dataclass
class StateEconomicRecord:
    """Population record merged with its ACS income and unemployment lookup"""
    state: str
    abbr: str
    population: int
    growth: float
    median_income: int
    unemployment: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert the record to the dictionary shape consumed by the dashboard"""
        return {
            "state": self.state,
            "abbr": self.abbr,
            "population": self.population,
            "growth": self.growth,
            "medianIncome": self.median_income,
            "unemployment": self.unemployment
        }


@dataclass
class AgeBucket:
    """Male, female and total counts in millions for one age range"""
    age: str
    male: float
    female: float
    total: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "age": self.age,
            "male": self.male,
            "female": self.female,
            "total": self.total
        }


@dataclass
class RaceCategory:
    key: str
    value: float
    color: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "value": self.value,
            "color": self.color
        }


@dataclass
class HistoricalPopulationPoint:
    year: int
    population: float
    urban: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "year": self.year,
            "population": self.population,
            "urban": self.urban
        }
