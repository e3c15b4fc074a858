"""Class file module - binary parsing of compiled JVM classes."""

from tagcheck.classfile.models import (
    AnnotationNode,
    ClassDescriptor,
    ClassValue,
    EnumValue,
    FieldDescriptor,
)
from tagcheck.classfile.parser import parse_class, parse_class_file
from tagcheck.classfile.reader import ByteReader, decode_modified_utf8

__all__ = [
    "AnnotationNode",
    "ByteReader",
    "ClassDescriptor",
    "ClassValue",
    "EnumValue",
    "FieldDescriptor",
    "decode_modified_utf8",
    "parse_class",
    "parse_class_file",
]
