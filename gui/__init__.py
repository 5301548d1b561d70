# gui/__init__.py
"""
Desktop front end (ttkbootstrap) for the Fourier image mixer.
"""
