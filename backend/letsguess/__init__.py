"""LetsGuess: многопользовательская игра с угадыванием слов скрытой статьи."""

__version__ = "0.1.0"
