from enum import Enum


class ProgrammingLanguage(str, Enum):
    CSHARP = "C#"
    JAVA = "Java"
    JAVASCRIPT = "JavaScript"
    TYPESCRIPT = "TypeScript"
    PYTHON = "Python"
    GO = "Go"
    R = "R"
    OTHER = "Other"


class FormStep(str, Enum):
    """Waterfall steps of the registration form, in execution order."""

    NAME = "name"
    NAME_CONFIRM = "name_confirm"
    AGE = "age"
    CITY = "city"
    FAVOURITE_LANGUAGE = "favourite_language"
    CONFIRM = "confirm"
    SUMMARY = "summary"


class PromptKind(str, Enum):
    TEXT = "text"
    CHOICE = "choice"
    NUMBER = "number"


class DialogStateScope(str, Enum):
    CONVERSATION = "conversation"
    USER = "user"
    PRIVATE_CONVERSATION = "private_conversation"
