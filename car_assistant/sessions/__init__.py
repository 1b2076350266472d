"""
Wizard session state.

Responsibilities:
- Create a session for a new wizard run, or return the one being resumed.
- Apply partial updates so omitted fields keep their previous value.
- Append one immutable step per update to the session history.
- Persist sessions through a pluggable key-value store.
"""
