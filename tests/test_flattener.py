"""Tests del flattener.

Ejecutar:
    pytest tests/test_flattener.py -v
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import pytest

from dashboard_api.core.domain.message import SensorMessage
from dashboard_api.core.flattener import extract_value, flatten, flatten_reading, parse_timestamp
from dashboard_api.core.validators import (
    BrokerMessagePayload,
    SensorReadingPayload,
    validate_broker_message,
    validate_sensor_reading,
)


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def temperature_raw() -> Dict[str, Any]:
    """Mensaje de temperatura tal como lo serializa el broker."""
    return {
        "constructed_when": "2024-05-01T10:00:00.123456789+02:00",
        "sent_when": None,
        "received_when": None,
        "broker_id": "7f0c3c3e-1111-2222-3333-444455556666",
        "payload": {"SensorData": {"Temperature": {"sensor_id": 3, "kelvin": 293}}},
    }


@pytest.fixture
def heartbeat_raw() -> Dict[str, Any]:
    return {
        "constructed_when": "2024-05-01T10:00:00+00:00",
        "broker_id": "7f0c3c3e-1111-2222-3333-444455556666",
        "payload": {"Heartbeat": {"uid": "7f0c3c3e", "key": None}},
    }


# =============================================================================
# TIMESTAMPS
# =============================================================================

class TestParseTimestamp:

    def test_nanoseconds_truncated_to_microseconds(self):
        dt = parse_timestamp("2024-05-01T10:00:00.123456789+02:00")
        assert dt == datetime(2024, 5, 1, 10, 0, 0, 123456, tzinfo=timezone(timedelta(hours=2)))

    def test_z_suffix_is_utc(self):
        dt = parse_timestamp("2024-05-01T08:00:00Z")
        assert dt == datetime(2024, 5, 1, 8, 0, tzinfo=timezone.utc)

    def test_naive_assumed_utc(self):
        dt = parse_timestamp("2024-05-01T08:00:00")
        assert dt.tzinfo is not None
        assert dt == datetime(2024, 5, 1, 8, 0, tzinfo=timezone.utc)

    def test_same_instant_different_offsets_compare_equal(self):
        a = parse_timestamp("2024-05-01T10:00:00+02:00")
        b = parse_timestamp("2024-05-01T08:00:00Z")
        assert a == b

    @pytest.mark.parametrize("value", [None, "", "not a date", 12345, "2024-13-45T99:00:00"])
    def test_unparsable_returns_none(self, value):
        assert parse_timestamp(value) is None


# =============================================================================
# VALOR DE LA MÉTRICA
# =============================================================================

class TestExtractValue:

    def test_known_metric(self):
        assert extract_value({"sensor_id": 1, "humidity": 55}) == 55.0

    def test_first_known_metric_wins(self):
        """Con varias métricas conocidas gana la primera en orden de declaración."""
        assert extract_value({"sensor_id": 1, "humidity": 55, "kelvin": 290}) == 290.0

    def test_known_metric_preferred_over_unknown(self):
        assert extract_value({"sensor_id": 1, "lux": 900, "kelvin": 290}) == 290.0

    def test_single_unknown_numeric_field_used(self):
        assert extract_value({"sensor_id": 1, "lux": 900}) == 900.0

    def test_ambiguous_unknown_fields_rejected(self):
        assert extract_value({"sensor_id": 1, "lux": 900, "ppm": 400}) is None

    def test_non_numeric_rejected(self):
        assert extract_value({"sensor_id": 1, "kelvin": "hot"}) is None
        assert extract_value({"sensor_id": 1, "kelvin": True}) is None

    def test_only_sensor_id(self):
        assert extract_value({"sensor_id": 1}) is None


# =============================================================================
# FLATTEN
# =============================================================================

class TestFlatten:

    def test_well_formed_message(self, temperature_raw):
        msg = SensorMessage.from_raw(temperature_raw)
        flatten(msg)

        flat = msg.flat
        assert flat is not None
        assert flat.topic == "temperature"
        assert flat.sensor_id == 3
        assert flat.value == 293.0
        assert flat.when == parse_timestamp("2024-05-01T08:00:00.123456Z")
        assert flat.is_usable

    def test_idempotent(self, temperature_raw):
        """Aplanar dos veces el mismo mensaje produce el mismo registro."""
        msg = SensorMessage.from_raw(temperature_raw)
        flatten(msg)
        first = msg.flat
        flatten(msg)
        assert msg.flat == first

    def test_empty_sensor_data_is_noop(self, temperature_raw):
        temperature_raw["payload"]["SensorData"] = {}
        msg = SensorMessage.from_raw(temperature_raw)
        flatten(msg)
        assert msg.flat is None

    def test_heartbeat_has_no_record(self, heartbeat_raw):
        msg = SensorMessage.from_raw(heartbeat_raw)
        flatten(msg)
        assert msg.flat is None

    def test_missing_payload_does_not_raise(self):
        msg = SensorMessage.from_raw({"broker_id": "b1"})
        flatten(msg)
        assert msg.flat is None

    def test_non_dict_message_does_not_raise(self):
        msg = SensorMessage.from_raw(["garbage"])
        flatten(msg)
        assert msg.flat is None
        assert msg.broker_id is None

    def test_missing_sensor_id_gives_partial_record(self, temperature_raw):
        del temperature_raw["payload"]["SensorData"]["Temperature"]["sensor_id"]
        msg = SensorMessage.from_raw(temperature_raw)
        flatten(msg)
        assert msg.flat is not None
        assert msg.flat.sensor_id is None
        assert not msg.flat.is_usable

    def test_bad_timestamp_gives_partial_record(self, temperature_raw):
        temperature_raw["constructed_when"] = "yesterday"
        msg = SensorMessage.from_raw(temperature_raw)
        flatten(msg)
        assert msg.flat.when is None
        assert not msg.flat.is_usable

    def test_multiple_topics_last_wins(self, temperature_raw):
        temperature_raw["payload"]["SensorData"] = {
            "Temperature": {"sensor_id": 1, "kelvin": 290},
            "Humidity": {"sensor_id": 2, "humidity": 40},
        }
        msg = SensorMessage.from_raw(temperature_raw)
        flatten(msg)
        assert msg.flat.topic == "humidity"
        assert msg.flat.sensor_id == 2
        assert msg.flat.value == 40.0

    def test_bool_sensor_id_gives_partial_record(self, temperature_raw):
        temperature_raw["payload"]["SensorData"]["Temperature"]["sensor_id"] = True
        msg = SensorMessage.from_raw(temperature_raw)
        flatten(msg)
        assert msg.flat.sensor_id is None
        assert msg.flat.value == 293.0

    def test_non_object_sensor_data_has_no_record(self, temperature_raw):
        temperature_raw["payload"]["SensorData"] = ["Temperature", 293]
        msg = SensorMessage.from_raw(temperature_raw)
        flatten(msg)
        assert msg.flat is None
        assert msg.broker_id == "7f0c3c3e-1111-2222-3333-444455556666"

    def test_non_object_reading_gives_empty_record(self):
        rec = flatten_reading("Temperature", 293, "2024-05-01T10:00:00Z")
        assert rec.topic == "temperature"
        assert rec.sensor_id is None
        assert rec.value is None
        assert not rec.is_usable


# =============================================================================
# VALIDADORES
# =============================================================================

class TestValidateBrokerMessage:

    def test_valid_envelope(self, temperature_raw):
        result = validate_broker_message(temperature_raw)

        assert result.valid is True
        assert isinstance(result.payload, BrokerMessagePayload)
        assert result.payload.broker_key == "7f0c3c3e-1111-2222-3333-444455556666"
        assert result.payload.sensor_data == {"Temperature": {"sensor_id": 3, "kelvin": 293}}
        assert result.warnings == []

    def test_numeric_broker_id_kept_as_text(self, temperature_raw):
        temperature_raw["broker_id"] = 1234
        assert validate_broker_message(temperature_raw).payload.broker_key == "1234"

    def test_invalid_field_dropped_rest_kept(self, temperature_raw):
        """Un `constructed_when` no textual no invalida el resto del sobre."""
        temperature_raw["constructed_when"] = 1714557600
        result = validate_broker_message(temperature_raw)

        assert result.valid is False
        assert result.error
        assert result.warnings == ["dropped invalid field 'constructed_when'"]
        assert result.payload.constructed_when is None
        assert result.payload.broker_key is not None
        assert result.payload.sensor_data is not None

    def test_invalid_timestamp_type_gives_partial_record(self, temperature_raw):
        temperature_raw["constructed_when"] = 1714557600
        msg = SensorMessage.from_raw(temperature_raw)
        flatten(msg)
        assert msg.flat.sensor_id == 3
        assert msg.flat.when is None

    @pytest.mark.parametrize("data", [None, "garbage", ["a"], 42])
    def test_non_object_gives_empty_envelope(self, data):
        result = validate_broker_message(data)
        assert result.valid is False
        assert result.payload == BrokerMessagePayload()


class TestValidateSensorReading:

    def test_extra_fields_are_metrics(self):
        result = validate_sensor_reading({"sensor_id": "kitchen", "kelvin": 290, "lux": 3})

        assert result.valid is True
        assert isinstance(result.payload, SensorReadingPayload)
        assert result.payload.sensor_id == "kitchen"
        assert result.payload.metrics == {"kelvin": 290, "lux": 3}

    @pytest.mark.parametrize("sensor_id", [True, 1.5, [1], {"id": 1}])
    def test_invalid_sensor_id_dropped(self, sensor_id):
        result = validate_sensor_reading({"sensor_id": sensor_id, "humidity": 40})

        assert result.valid is False
        assert result.payload.sensor_id is None
        assert result.payload.metrics == {"humidity": 40}

    def test_non_object_reading_has_no_payload(self):
        result = validate_sensor_reading("kelvin=290")
        assert result.valid is False
        assert result.payload is None
