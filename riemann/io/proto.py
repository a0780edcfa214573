"""
Riemann wire schema.

The schema is the subset of the Riemann ``proto.proto`` this library speaks,
built at import time from a FileDescriptorProto. Field numbers match the
published schema so messages are byte-compatible with a real server.

    message Msg   { optional bool ok = 2; optional string error = 3;
                    optional Query query = 5; repeated Event events = 6; }
    message Event { optional int64 time = 1; optional string state = 2;
                    optional string service = 3; optional string host = 4;
                    optional string description = 5; optional float ttl = 8;
                    optional sint64 metric_sint64 = 13; optional double metric_d = 14;
                    optional float metric_f = 15; }
    message Query { optional string string = 1; }

All fields are proto2 ``optional`` so that an absent field is distinguishable
from a field carrying its zero value.
"""

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

_F = descriptor_pb2.FieldDescriptorProto

PACKAGE = "riemann"

# (name, number, type, label, type_name)
_MESSAGES: dict[str, list[tuple]] = {
    "Query": [
        ("string", 1, _F.TYPE_STRING, _F.LABEL_OPTIONAL, None),
    ],
    "Event": [
        ("time", 1, _F.TYPE_INT64, _F.LABEL_OPTIONAL, None),
        ("state", 2, _F.TYPE_STRING, _F.LABEL_OPTIONAL, None),
        ("service", 3, _F.TYPE_STRING, _F.LABEL_OPTIONAL, None),
        ("host", 4, _F.TYPE_STRING, _F.LABEL_OPTIONAL, None),
        ("description", 5, _F.TYPE_STRING, _F.LABEL_OPTIONAL, None),
        ("ttl", 8, _F.TYPE_FLOAT, _F.LABEL_OPTIONAL, None),
        ("metric_sint64", 13, _F.TYPE_SINT64, _F.LABEL_OPTIONAL, None),
        ("metric_d", 14, _F.TYPE_DOUBLE, _F.LABEL_OPTIONAL, None),
        ("metric_f", 15, _F.TYPE_FLOAT, _F.LABEL_OPTIONAL, None),
    ],
    "Msg": [
        ("ok", 2, _F.TYPE_BOOL, _F.LABEL_OPTIONAL, None),
        ("error", 3, _F.TYPE_STRING, _F.LABEL_OPTIONAL, None),
        ("query", 5, _F.TYPE_MESSAGE, _F.LABEL_OPTIONAL, f".{PACKAGE}.Query"),
        ("events", 6, _F.TYPE_MESSAGE, _F.LABEL_REPEATED, f".{PACKAGE}.Event"),
    ],
}


def _file_descriptor_proto() -> descriptor_pb2.FileDescriptorProto:
    file_proto = descriptor_pb2.FileDescriptorProto(
        name="riemann/proto.proto",
        package=PACKAGE,
        syntax="proto2",
    )
    for message_name, fields in _MESSAGES.items():
        message_proto = file_proto.message_type.add(name=message_name)
        for name, number, field_type, label, type_name in fields:
            field_proto = message_proto.field.add(name=name, number=number, type=field_type, label=label)
            if type_name:
                field_proto.type_name = type_name
    return file_proto


# A private pool keeps the schema from clashing with other riemann.* protos
# registered in the default pool by another library.
_pool = descriptor_pool.DescriptorPool()
_pool.AddSerializedFile(_file_descriptor_proto().SerializeToString())

Query = message_factory.GetMessageClass(_pool.FindMessageTypeByName(f"{PACKAGE}.Query"))
Event = message_factory.GetMessageClass(_pool.FindMessageTypeByName(f"{PACKAGE}.Event"))
Msg = message_factory.GetMessageClass(_pool.FindMessageTypeByName(f"{PACKAGE}.Msg"))
