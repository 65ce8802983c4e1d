"""Tool argument validation and declaration generation."""

from .parameter_validator import ParameterValidator
from .declarations import FunctionDeclaration, to_function_declaration

__all__ = ["ParameterValidator", "FunctionDeclaration", "to_function_declaration"]
