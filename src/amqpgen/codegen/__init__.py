from amqpgen.codegen.generator import (
    compile_module,
    generate_module,
    generate_source
)
from amqpgen.codegen.printer import DISCLAIMER, render

__all__ = [
    "DISCLAIMER",
    "compile_module",
    "generate_module",
    "generate_source",
    "render",
]
