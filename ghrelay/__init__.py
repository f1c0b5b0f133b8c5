"""ghrelay: relay new GitHub issues and comments to Discord and Misskey."""

__version__ = "0.1.0"
