"""UI configuration constants.

Centralizes styles, marker texts and timing values for the terminal UI.
"""

# Typewriter pacing between rendered characters, independent of network timing
CHAR_DELAY_SECONDS = 0.010

# How often the input loop wakes up while waiting for a key
INPUT_POLL_SECONDS = 0.1

# Styles
TEXT_STYLE = "green"
REASONING_STYLE = "blue"
DIAGNOSTIC_STYLE = "red"
NOTICE_STYLE = "yellow"
BANNER_STYLE = "bold blue"
USER_PROMPT_STYLE = "bold cyan"
ASSISTANT_PROMPT_STYLE = "bold green"
SELECTION_MARK_STYLE = "green"
MODEL_INFO_STYLE = "dim"

# Texts
USER_PROMPT = "You:"
ASSISTANT_PROMPT = "AI:"
INTERRUPTED_MARKER = "[interrupted]"
HISTORY_CLEARED_NOTICE = "[chat history cleared]"
DOUBLE_ESC_EXIT_NOTICE = "[Esc pressed twice, exiting]"
MODEL_SWITCH_CANCELLED_NOTICE = "Model switch cancelled"
MULTIPLE_MATCHES_NOTICE = "Several models match, choose one with the Up/Down keys:"
WELCOME_BANNER = (
    "Welcome to Hambur. Type 'exit' to quit, 'clear' to reset the chat history, "
    "or a model keyword to switch models. Press Esc twice to exit."
)
