"""downmix - stereo downmix for media files with surround audio."""

__version__ = "0.1.0"
