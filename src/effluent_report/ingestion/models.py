"""Data models for the ingestion layer."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class SensorInputs:
    """Raw sensor inputs of the plant."""

    level: float
    temperature_sensor: float
    flow_sensor_a: float
    flow_sensor_b: float
    level_sensor_b: float
    flow_rate_a: float
    flow_rate_b: float


@dataclass(frozen=True)
class ContainerFlow:
    """Buffer tank throughput and outflow."""

    flow: float
    drain: float


@dataclass(frozen=True)
class Measurements:
    """Primary monitored quantities."""

    flow: float
    temperature: float
    conductivity: float
    ph: float


@dataclass(frozen=True)
class ValueRange:
    minimum: float
    maximum: float


@dataclass(frozen=True)
class Sewage:
    """Discharge quantity plus temperature and pH ranges at the discharge point."""

    discharge: float
    temperature: ValueRange
    ph: ValueRange


@dataclass(frozen=True)
class Reading:
    """Single parsed export line."""

    timestamp: datetime
    message: str
    sensors: SensorInputs
    container: ContainerFlow
    measurement: Measurements
    sewage: Sewage
    line_number: int = 0

    def numeric_values(self) -> list[float]:
        """Return the 18 numeric values in export column order."""
        return [
            self.sensors.level,
            self.container.flow,
            self.measurement.flow,
            self.measurement.temperature,
            self.measurement.conductivity,
            self.measurement.ph,
            self.sensors.temperature_sensor,
            self.sensors.flow_sensor_a,
            self.sensors.flow_sensor_b,
            self.sensors.level_sensor_b,
            self.sensors.flow_rate_a,
            self.sensors.flow_rate_b,
            self.container.drain,
            self.sewage.discharge,
            self.sewage.temperature.maximum,
            self.sewage.temperature.minimum,
            self.sewage.ph.maximum,
            self.sewage.ph.minimum,
        ]
