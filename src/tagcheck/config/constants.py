"""Configuration constants.

Class file format values and defaults that should NOT be user-configurable.
For configurable values, see models.py (ScanConfig, LoggingConfig).
"""

# =============================================================================
# Class file format (JVMS chapter 4)
# =============================================================================

CLASS_MAGIC = 0xCAFEBABE
"""First four bytes of every class file."""

ACC_STATIC = 0x0008
"""Field access flag marking a class-level (static) field."""

CONSTANT_UTF8 = 1
CONSTANT_INTEGER = 3
CONSTANT_FLOAT = 4
CONSTANT_LONG = 5
CONSTANT_DOUBLE = 6
CONSTANT_CLASS = 7
CONSTANT_STRING = 8
CONSTANT_FIELDREF = 9
CONSTANT_METHODREF = 10
CONSTANT_INTERFACE_METHODREF = 11
CONSTANT_NAME_AND_TYPE = 12
CONSTANT_METHOD_HANDLE = 15
CONSTANT_METHOD_TYPE = 16
CONSTANT_DYNAMIC = 17
CONSTANT_INVOKE_DYNAMIC = 18
CONSTANT_MODULE = 19
CONSTANT_PACKAGE = 20

RUNTIME_VISIBLE_ANNOTATIONS = "RuntimeVisibleAnnotations"
"""The only field attribute decoded; everything else is skipped by length."""

# =============================================================================
# Scan defaults
# =============================================================================

DEFAULT_TAG_DESCRIPTOR = "Lio/protostuff/Tag;"
"""Field descriptor of the protostuff ``@Tag`` annotation."""

DEFAULT_CLASS_EXTENSION = ".class"

DEFAULT_CLASSES_DIRS: tuple[str, ...] = (
    "target/classes",  # Maven
    "build/classes/java/main",  # Gradle, Java
    "build/classes/kotlin/main",  # Gradle, Kotlin
)
"""Output directories tried, in order, when no classes dir is given."""

PROJECT_CONFIG_NAME = "tagcheck.yaml"
