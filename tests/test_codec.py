import pytest

from riemann import Event, Msg, RiemannEvent, encode_event, decode_events
from riemann.api import FIELD_MAP, build_event_message, build_query_message, float32


def full_event() -> RiemannEvent:
    return RiemannEvent(
        ttl=30.1,
        time=1_700_000_000,
        host="web1",
        state="ok",
        service="cpu",
        description="load average",
        metric_float=0.3,
        metric_double=0.1,
        metric_int=-42,
    )


def test_encode_sets_every_non_zero_field():
    wire = encode_event(full_event())
    assert wire.host == "web1"
    assert wire.state == "ok"
    assert wire.service == "cpu"
    assert wire.description == "load average"
    assert wire.ttl == float32(30.1)
    assert wire.time == 1_700_000_000


def test_encode_aliases_metric_fields():
    wire = encode_event(RiemannEvent(metric_float=1.5, metric_double=2.25, metric_int=7))
    assert wire.metric_f == 1.5
    assert wire.metric_d == 2.25
    assert wire.metric_sint64 == 7
    assert not wire.HasField("host")


def test_encode_of_empty_event_sets_nothing():
    wire = encode_event(RiemannEvent())
    for mapping in FIELD_MAP:
        assert not wire.HasField(mapping.destination), mapping.destination
    assert wire.SerializeToString() == b""


@pytest.mark.parametrize("mapping", FIELD_MAP, ids=lambda m: m.source)
def test_encode_never_sets_zero_valued_fields(mapping):
    event = full_event()
    setattr(event, mapping.source, mapping.convert())
    wire = encode_event(event)
    assert not wire.HasField(mapping.destination)
    for other in FIELD_MAP:
        if other is not mapping:
            assert wire.HasField(other.destination), other.destination


def test_encode_treats_none_as_unset():
    wire = encode_event(RiemannEvent(host=None, service="disk"))
    assert not wire.HasField("host")
    assert wire.service == "disk"


def test_round_trip_preserves_non_zero_fields():
    event = full_event()
    assert decode_events([encode_event(event)]) == [event]


def test_round_trip_of_zero_metric_yields_zero():
    event = RiemannEvent(host="web1", service="queue depth", metric_int=0, time=0)
    wire = encode_event(event)
    assert not wire.HasField("metric_sint64")
    decoded, = decode_events([wire])
    assert decoded.metric_int == 0
    assert decoded.time == 0
    assert decoded.metric is None
    assert decoded.host == "web1"


def test_single_precision_fields_are_rounded_on_creation():
    event = RiemannEvent(ttl=0.1, metric_float=0.1)
    assert event.ttl == float32(0.1)
    assert event.metric_float == float32(0.1)
    assert event.ttl != 0.1
    assert event.ttl == pytest.approx(0.1, rel=1e-6)


def test_single_precision_fields_round_trip_exactly():
    event = RiemannEvent(host="h", ttl=0.1, metric_float=1 / 3)
    assert decode_events([encode_event(event)]) == [event]


def test_float32_is_idempotent_and_zero_by_default():
    assert float32() == 0.0
    assert float32(float32(0.7)) == float32(0.7)
    assert float32(30.5) == 30.5


def test_decode_of_absent_fields_yields_zero_values():
    decoded, = decode_events([Event()])
    assert decoded == RiemannEvent()


def test_decode_preserves_order():
    wire = [Event(service="a"), Event(service="b"), Event(service="c")]
    assert [e.service for e in decode_events(wire)] == ["a", "b", "c"]


def test_decode_of_nothing_is_empty():
    assert decode_events([]) == []


def test_metric_property_prefers_int_then_double_then_float():
    assert RiemannEvent(metric_int=3, metric_double=2.0, metric_float=1.0).metric == 3
    assert RiemannEvent(metric_double=2.0, metric_float=1.0).metric == 2.0
    assert RiemannEvent(metric_float=1.0).metric == 1.0


def test_build_event_message_carries_every_event():
    message = build_event_message([RiemannEvent(service="a"), RiemannEvent(service="b")])
    assert [e.service for e in message.events] == ["a", "b"]
    assert not message.HasField("query")
    assert not message.HasField("ok")


def test_build_query_message_carries_only_the_query():
    message = build_query_message('service = "cpu"')
    assert message.query.string == 'service = "cpu"'
    assert len(message.events) == 0

    parsed = Msg()
    parsed.ParseFromString(message.SerializeToString())
    assert parsed.HasField("query")
