from .bootstrap_context import BootstrapContext

__all__ = ['BootstrapContext']
