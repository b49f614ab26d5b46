from .base import FunctionDecorator, Signature, Arguments
from .extension import extension_func, ExtensionFunc
