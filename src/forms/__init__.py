"""
Forms package.

Chat-transport independent question/answer flows:
- prompts: answer recognition and validation for text, choice and number prompts
- registration_form: the registration waterfall run by the turn router
"""
