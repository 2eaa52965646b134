import json
from dataclasses import dataclass, field
from typing import Any, Optional

from jsonschema import Draft202012Validator  # type: ignore

from cxxglue import utils
from cxxglue.conversion import (CppConversionType, RustConversionType,
                                SubclassName, TypeConversionPolicy,
                                parse_type)
from cxxglue.generator import (AdditionalNeed, ConstructorPayload,
                               FunctionCallPayload, FunctionWrapper,
                               FunctionWrapperNeed, MakeStringConstructorNeed,
                               StaticMethodCallPayload)
from cxxglue.logging import get_logger
from cxxglue.type_database import TypeDatabase

logger = get_logger(__name__)

_SCHEMA_CACHE: Optional[dict] = None


class NeedsFileError(ValueError):
    pass


@dataclass
class NeedsDocument:
    needs: list[AdditionalNeed] = field(default_factory=list)
    inclusions: str = ""
    type_database: TypeDatabase = field(default_factory=TypeDatabase)


def _load_schema() -> dict:
    global _SCHEMA_CACHE
    if _SCHEMA_CACHE is None:
        _SCHEMA_CACHE = json.loads(utils.read_resource_text("needs.schema.json"))
    return _SCHEMA_CACHE


def validate_needs(data: Any) -> None:
    validator = Draft202012Validator(_load_schema())
    errors = sorted(validator.iter_errors(data), key=lambda e: list(e.absolute_path))
    if errors:
        first = errors[0]
        location = "/".join(str(part) for part in first.absolute_path) or "<root>"
        raise NeedsFileError(f"schema:{location}: {first.message}")


def _policy_from_dict(data: dict) -> TypeConversionPolicy:
    try:
        ty = parse_type(data["type"])
    except ValueError as exc:
        raise NeedsFileError(str(exc)) from exc
    cpp_conversion = CppConversionType[data.get("cpp_conversion", "none").upper()]
    rust_conversion = RustConversionType[data.get("rust_conversion", "none").upper()]
    subclass = SubclassName(data["subclass"]) if "subclass" in data else None
    return TypeConversionPolicy(
        ty,
        cpp_conversion=cpp_conversion,
        rust_conversion=rust_conversion,
        subclass=subclass,
    )


def _payload_from_dict(data: dict):
    match data["kind"]:
        case "constructor":
            return ConstructorPayload()
        case "free_function":
            return FunctionCallPayload(data["ident"], tuple(data.get("namespace", ())))
        case "static_method":
            return StaticMethodCallPayload(
                tuple(data.get("namespace", ())), data["type_ident"], data["fn_ident"])
        case other:
            raise NeedsFileError(f"unknown payload kind: {other}")


def need_from_dict(data: dict) -> AdditionalNeed:
    match data["kind"]:
        case "string_constructor":
            return MakeStringConstructorNeed()
        case "function_wrapper":
            ret = data.get("return")
            wrapper = FunctionWrapper(
                wrapper_function_name=data["name"],
                payload=_payload_from_dict(data["payload"]),
                argument_conversion=tuple(_policy_from_dict(arg) for arg in data.get("arguments", [])),
                return_conversion=_policy_from_dict(ret) if ret is not None else None,
                is_a_method=data.get("is_a_method", False),
            )
            return FunctionWrapperNeed(wrapper)
        case other:
            raise NeedsFileError(f"unknown need kind: {other}")


def needs_from_dict(data: Any) -> NeedsDocument:
    validate_needs(data)
    document = NeedsDocument(
        needs=[need_from_dict(entry) for entry in data["needs"]],
        inclusions=data.get("inclusions", ""),
        type_database=TypeDatabase(data.get("types")),
    )
    logger.debug("loaded %d need(s)", len(document.needs))
    return document


def load_needs_file(path: str) -> NeedsDocument:
    try:
        data = json.loads(utils.read_file(path))
    except json.JSONDecodeError as exc:
        raise NeedsFileError(f"{path}: invalid JSON: {exc}") from exc
    return needs_from_dict(data)
