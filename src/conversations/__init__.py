"""
Conversations package.

Transport-independent turn handling: the turn router gates every inbound
message and hands registration turns to the registration form.
"""
