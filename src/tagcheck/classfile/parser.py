"""Class file parser.

Decodes one compiled class into a ClassDescriptor without loading or
executing it. Layout (JVMS 4.1)::

    magic u4, minor u2, major u2,
    constant_pool_count u2, cp_info[count - 1],
    access_flags u2, this_class u2, super_class u2,
    interfaces_count u2, u2[interfaces_count],
    fields_count u2, field_info[fields_count],
    methods_count u2, method_info[methods_count],
    attributes_count u2, attribute_info[attributes_count]

Only field-level RuntimeVisibleAnnotations are decoded. Every other
attribute (Code, LineNumberTable, LocalVariableTable, Signature, ...) is
skipped by its declared length. Static fields are dropped.

Any structural problem raises ParseError; a partially parsed class is
never returned.
"""

from __future__ import annotations

from pathlib import Path

from tagcheck.classfile.models import (
    AnnotationNode,
    ClassDescriptor,
    ClassValue,
    EnumValue,
    FieldDescriptor,
)
from tagcheck.classfile.reader import ByteReader, decode_modified_utf8
from tagcheck.config.constants import (
    ACC_STATIC,
    CLASS_MAGIC,
    CONSTANT_CLASS,
    CONSTANT_DOUBLE,
    CONSTANT_DYNAMIC,
    CONSTANT_FIELDREF,
    CONSTANT_FLOAT,
    CONSTANT_INTEGER,
    CONSTANT_INTERFACE_METHODREF,
    CONSTANT_INVOKE_DYNAMIC,
    CONSTANT_LONG,
    CONSTANT_METHOD_HANDLE,
    CONSTANT_METHOD_TYPE,
    CONSTANT_METHODREF,
    CONSTANT_MODULE,
    CONSTANT_NAME_AND_TYPE,
    CONSTANT_PACKAGE,
    CONSTANT_STRING,
    CONSTANT_UTF8,
    RUNTIME_VISIBLE_ANNOTATIONS,
)
from tagcheck.core.errors import ParseError, ScanError

# Payload size of fixed-width constant pool entries
_FIXED_SIZES: dict[int, int] = {
    CONSTANT_CLASS: 2,
    CONSTANT_STRING: 2,
    CONSTANT_METHOD_TYPE: 2,
    CONSTANT_MODULE: 2,
    CONSTANT_PACKAGE: 2,
    CONSTANT_FIELDREF: 4,
    CONSTANT_METHODREF: 4,
    CONSTANT_INTERFACE_METHODREF: 4,
    CONSTANT_NAME_AND_TYPE: 4,
    CONSTANT_DYNAMIC: 4,
    CONSTANT_INVOKE_DYNAMIC: 4,
    CONSTANT_METHOD_HANDLE: 3,
}

_TAG_NAMES: dict[int, str] = {
    CONSTANT_UTF8: "Utf8",
    CONSTANT_INTEGER: "Integer",
    CONSTANT_FLOAT: "Float",
    CONSTANT_LONG: "Long",
    CONSTANT_DOUBLE: "Double",
    CONSTANT_CLASS: "Class",
    CONSTANT_STRING: "String",
}

# Element value tag -> constant pool tag holding its value (JVMS 4.7.16.1)
_CONST_ELEMENTS: dict[int, int] = {
    ord("B"): CONSTANT_INTEGER,
    ord("C"): CONSTANT_INTEGER,
    ord("I"): CONSTANT_INTEGER,
    ord("S"): CONSTANT_INTEGER,
    ord("Z"): CONSTANT_INTEGER,
    ord("J"): CONSTANT_LONG,
    ord("F"): CONSTANT_FLOAT,
    ord("D"): CONSTANT_DOUBLE,
    ord("s"): CONSTANT_UTF8,
}


class _ClassFileParser:
    """Single-use parser over one class file buffer."""

    def __init__(self, data: bytes, source: str | None) -> None:
        self._r = ByteReader(data, source=source)
        self._source = source
        # Index 0 and the upper slot of Long/Double entries stay None
        self._pool: list[tuple[int, object] | None] = []
        self._utf8_cache: dict[int, str] = {}

    def parse(self) -> ClassDescriptor:
        r = self._r
        magic = r.u4()
        if magic != CLASS_MAGIC:
            raise ParseError.bad_magic(self._source, magic)
        r.u2()  # minor_version
        r.u2()  # major_version

        self._read_constant_pool()

        access_flags = r.u2()
        name = self._class_name(r.u2())
        r.u2()  # super_class, index 0 for java/lang/Object
        r.skip(2 * r.u2())  # interfaces

        fields = tuple(
            f for f in (self._read_field() for _ in range(r.u2())) if f is not None
        )

        for _ in range(r.u2()):  # methods
            r.skip(6)  # access_flags, name_index, descriptor_index
            self._skip_attributes()
        self._skip_attributes()  # class attributes

        if r.remaining:
            raise ParseError.malformed(
                self._source, f"{r.remaining} trailing byte(s) after class attributes"
            )
        return ClassDescriptor(name=name, fields=fields, access_flags=access_flags)

    # ------------------------------------------------------------------
    # Constant pool
    # ------------------------------------------------------------------

    def _read_constant_pool(self) -> None:
        r = self._r
        count = r.u2()
        pool: list[tuple[int, object] | None] = [None] * max(count, 1)
        index = 1
        while index < count:
            tag = r.u1()
            if tag == CONSTANT_UTF8:
                pool[index] = (tag, r.read_bytes(r.u2()))
            elif tag == CONSTANT_INTEGER:
                pool[index] = (tag, r.s4())
            elif tag == CONSTANT_FLOAT:
                pool[index] = (tag, r.f4())
            elif tag in (CONSTANT_LONG, CONSTANT_DOUBLE):
                pool[index] = (tag, r.s8() if tag == CONSTANT_LONG else r.f8())
                index += 1  # 8-byte constants take two slots
            elif tag in (CONSTANT_CLASS, CONSTANT_STRING):
                pool[index] = (tag, r.u2())
            elif tag in _FIXED_SIZES:
                r.skip(_FIXED_SIZES[tag])
                pool[index] = (tag, None)
            else:
                raise ParseError.bad_constant_tag(self._source, index, tag)
            index += 1
        if index != max(count, 1):
            # A Long/Double in the last slot overruns the declared count
            raise ParseError.malformed(
                self._source, "8-byte constant overruns constant_pool_count", count=count
            )
        self._pool = pool

    def _entry(self, index: int, expected: int) -> object:
        if not 0 < index < len(self._pool):
            raise ParseError.bad_constant_index(self._source, index)
        entry = self._pool[index]
        if entry is None or entry[0] != expected:
            raise ParseError.bad_constant_index(self._source, index, _TAG_NAMES.get(expected))
        return entry[1]

    def _utf8(self, index: int) -> str:
        cached = self._utf8_cache.get(index)
        if cached is not None:
            return cached
        raw = self._entry(index, CONSTANT_UTF8)
        assert isinstance(raw, bytes)
        try:
            text = decode_modified_utf8(raw)
        except UnicodeDecodeError as e:
            raise ParseError.malformed(
                self._source, f"invalid modified UTF-8 at constant {index}", index=index
            ) from e
        self._utf8_cache[index] = text
        return text

    def _class_name(self, index: int) -> str:
        name_index = self._entry(index, CONSTANT_CLASS)
        assert isinstance(name_index, int)
        return self._utf8(name_index)

    # ------------------------------------------------------------------
    # Fields and attributes
    # ------------------------------------------------------------------

    def _read_field(self) -> FieldDescriptor | None:
        r = self._r
        access_flags = r.u2()
        name = self._utf8(r.u2())
        descriptor = self._utf8(r.u2())
        is_static = bool(access_flags & ACC_STATIC)

        annotations: tuple[AnnotationNode, ...] = ()
        for _ in range(r.u2()):
            attr_name = self._utf8(r.u2())
            length = r.u4()
            if attr_name == RUNTIME_VISIBLE_ANNOTATIONS and not is_static:
                annotations += self._read_annotations_attribute(length)
            else:
                r.skip(length)

        if is_static:
            return None
        return FieldDescriptor(
            name=name,
            descriptor=descriptor,
            access_flags=access_flags,
            annotations=annotations,
        )

    def _skip_attributes(self) -> None:
        r = self._r
        for _ in range(r.u2()):
            r.skip(2)  # attribute_name_index
            r.skip(r.u4())

    def _read_annotations_attribute(self, length: int) -> tuple[AnnotationNode, ...]:
        start = self._r.offset
        annotations = tuple(self._annotation() for _ in range(self._r.u2()))
        consumed = self._r.offset - start
        if consumed != length:
            raise ParseError.malformed(
                self._source,
                f"{RUNTIME_VISIBLE_ANNOTATIONS} declares {length} byte(s) but holds {consumed}",
                offset=start,
            )
        return annotations

    def _annotation(self) -> AnnotationNode:
        r = self._r
        desc = self._utf8(r.u2())
        values = tuple((self._utf8(r.u2()), self._element_value()) for _ in range(r.u2()))
        return AnnotationNode(desc=desc, values=values)

    def _element_value(self) -> object:
        r = self._r
        offset = r.offset
        tag = r.u1()

        pool_tag = _CONST_ELEMENTS.get(tag)
        if pool_tag is not None:
            index = r.u2()
            if pool_tag == CONSTANT_UTF8:
                return self._utf8(index)
            value = self._entry(index, pool_tag)
            if tag == ord("Z"):
                return bool(value)
            if tag == ord("C"):
                assert isinstance(value, int)
                return chr(value & 0xFFFF)
            return value

        if tag == ord("e"):
            return EnumValue(desc=self._utf8(r.u2()), name=self._utf8(r.u2()))
        if tag == ord("c"):
            return ClassValue(desc=self._utf8(r.u2()))
        if tag == ord("@"):
            return self._annotation()
        if tag == ord("["):
            return tuple(self._element_value() for _ in range(r.u2()))
        raise ParseError.bad_element_tag(self._source, tag, offset)


def parse_class(data: bytes, *, source: str | None = None) -> ClassDescriptor:
    """Parse class file bytes into a ClassDescriptor.

    Args:
        data: Complete contents of one class file.
        source: Name used in error messages (usually the file path).

    Raises:
        ParseError: Truncated input, bad magic, unreadable constant pool
            index, or any other structural defect.
    """
    return _ClassFileParser(data, source).parse()


def parse_class_file(path: Path) -> ClassDescriptor:
    """Read and parse one class file. The handle is closed before parsing starts."""
    try:
        with path.open("rb") as f:
            data = f.read()
    except OSError as e:
        raise ScanError.read_failed(str(path), str(e)) from e
    return parse_class(data, source=str(path))
