"""
Message classes for the nauthz authorization protocol.

The classes are built at import time from a FileDescriptorProto that mirrors
nauthz.proto, so no generated code is needed. Field numbers and types must
stay in step with that file.
"""

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

from ..config import RPC_PACKAGE

_Field = descriptor_pb2.FieldDescriptorProto


def _add_field(message, name, number, field_type, label=_Field.LABEL_OPTIONAL, type_name=None):
    field = message.field.add(name=name, number=number, type=field_type, label=label)
    if type_name:
        field.type_name = type_name
    return field


def _add_optional(message, name, number, field_type, type_name=None):
    # proto3 `optional` is a field inside a synthetic single-member oneof
    oneof_index = len(message.oneof_decl)
    message.oneof_decl.add(name=f"_{name}")
    field = _add_field(message, name, number, field_type, type_name=type_name)
    field.oneof_index = oneof_index
    field.proto3_optional = True
    return field


def _build_file() -> descriptor_pb2.FileDescriptorProto:
    proto = descriptor_pb2.FileDescriptorProto(
        name="nauthz.proto",
        package=RPC_PACKAGE,
        syntax="proto3",
    )

    event = proto.message_type.add(name="Event")
    tag_entry = event.nested_type.add(name="TagEntry")
    _add_field(tag_entry, "values", 1, _Field.TYPE_STRING, label=_Field.LABEL_REPEATED)
    _add_field(event, "id", 1, _Field.TYPE_BYTES)
    _add_field(event, "pubkey", 2, _Field.TYPE_BYTES)
    _add_field(event, "created_at", 3, _Field.TYPE_FIXED64)
    _add_field(event, "kind", 4, _Field.TYPE_UINT64)
    _add_field(event, "content", 5, _Field.TYPE_STRING)
    _add_field(
        event, "tags", 6, _Field.TYPE_MESSAGE,
        label=_Field.LABEL_REPEATED, type_name=f".{RPC_PACKAGE}.Event.TagEntry",
    )
    _add_field(event, "sig", 7, _Field.TYPE_BYTES)

    request = proto.message_type.add(name="EventRequest")
    _add_field(request, "event", 1, _Field.TYPE_MESSAGE, type_name=f".{RPC_PACKAGE}.Event")
    _add_optional(request, "ip_addr", 2, _Field.TYPE_STRING)
    _add_optional(request, "origin", 3, _Field.TYPE_STRING)
    _add_optional(request, "user_agent", 4, _Field.TYPE_STRING)
    _add_optional(request, "auth_pubkey", 5, _Field.TYPE_BYTES)
    _add_optional(request, "nip05", 6, _Field.TYPE_MESSAGE, type_name=f".{RPC_PACKAGE}.Nip05Name")

    nip05 = proto.message_type.add(name="Nip05Name")
    _add_field(nip05, "local", 1, _Field.TYPE_STRING)
    _add_field(nip05, "domain", 2, _Field.TYPE_STRING)

    decision = proto.enum_type.add(name="Decision")
    decision.value.add(name="DECISION_UNSPECIFIED", number=0)
    decision.value.add(name="DECISION_PERMIT", number=1)
    decision.value.add(name="DECISION_DENY", number=2)

    reply = proto.message_type.add(name="EventReply")
    _add_field(reply, "decision", 1, _Field.TYPE_ENUM, type_name=f".{RPC_PACKAGE}.Decision")
    _add_optional(reply, "message", 2, _Field.TYPE_STRING)

    service = proto.service.add(name="Authorization")
    service.method.add(
        name="EventAdmit",
        input_type=f".{RPC_PACKAGE}.EventRequest",
        output_type=f".{RPC_PACKAGE}.EventReply",
    )

    return proto


_pool = descriptor_pool.DescriptorPool()
_pool.AddSerializedFile(_build_file().SerializeToString())


def _message_class(name: str):
    return message_factory.GetMessageClass(_pool.FindMessageTypeByName(f"{RPC_PACKAGE}.{name}"))


Event = _message_class("Event")
EventRequest = _message_class("EventRequest")
EventReply = _message_class("EventReply")
Nip05Name = _message_class("Nip05Name")

_decision_values = _pool.FindEnumTypeByName(f"{RPC_PACKAGE}.Decision").values_by_name
DECISION_UNSPECIFIED = _decision_values["DECISION_UNSPECIFIED"].number
DECISION_PERMIT = _decision_values["DECISION_PERMIT"].number
DECISION_DENY = _decision_values["DECISION_DENY"].number
