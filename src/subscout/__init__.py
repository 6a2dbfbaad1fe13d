"""subscout - pair local videos with subtitles and resolve their IMDb identity."""

__version__ = "0.1.0"
