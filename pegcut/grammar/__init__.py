# pegcut/grammar/__init__.py
from .loader import load_grammar_text, load_grammar
