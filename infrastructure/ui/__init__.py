from .host_surface import HostSurface, HostSurfaceRenderer, RenderedAffordance

__all__ = ['HostSurface', 'HostSurfaceRenderer', 'RenderedAffordance']
