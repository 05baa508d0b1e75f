"""Framebuffer."""
