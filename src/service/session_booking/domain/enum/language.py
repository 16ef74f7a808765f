from enum import StrEnum


class Language(StrEnum):
    """Languages a test session can be held in (values are the public labels)"""

    ENGLISH = 'Anglais'
    FRENCH = 'Français'
    SPANISH = 'Espagnol'
    GERMAN = 'Allemand'
    ITALIAN = 'Italien'
    PORTUGUESE = 'Portugais'
    CHINESE = 'Chinois'
    JAPANESE = 'Japonais'
    ARABIC = 'Arabe'
