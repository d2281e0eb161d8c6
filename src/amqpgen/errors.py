class AmqpGenError(Exception):
    """Base exception for all amqpgen errors."""


class SchemaError(AmqpGenError):
    """Exception raised when a schema document is structurally malformed."""
    def __init__(self, message: str):
        super().__init__(message)


class UnresolvedTypeError(SchemaError):
    """Exception raised when an argument has neither a type nor a domain."""
    def __init__(self, message: str):
        super().__init__(message)


class UnknownDomainError(SchemaError):
    """Exception raised when an argument references a missing domain."""
    def __init__(self, domain: str):
        self.domain = domain
        super().__init__(f"Unknown domain '{domain}'")


class UnknownPrimitiveTypeError(SchemaError):
    """Exception raised when a type name is outside the primitive set."""
    def __init__(self, type_name: str):
        self.type_name = type_name
        super().__init__(f"Unknown type '{type_name}'")


class UnknownClassError(AmqpGenError):
    """Exception raised by generated dispatchers for an unknown class id."""
    def __init__(self, class_id: int):
        self.class_id = class_id
        super().__init__(f"Unknown class {class_id}")


class UnknownMethodError(AmqpGenError):
    """Exception raised by generated dispatchers for an unknown method id."""
    def __init__(self, class_id: int, method_id: int):
        self.class_id = class_id
        self.method_id = method_id
        super().__init__(f"Unknown method {method_id} for class {class_id}")


class EncodingError(AmqpGenError):
    """Exception raised when a value cannot be encoded as a field."""
    def __init__(self, message: str):
        super().__init__(message)


class DecodeError(AmqpGenError):
    """Exception raised when field data is truncated or malformed."""
    def __init__(self, message: str):
        super().__init__(message)
