# pegcut/combinators/__init__.py
"""Combinators of the execution engine.

- Sequence / Choice / Many / Optional: the structural combinators
- Cut / Attempt: commit marker and its scoping barrier
- Ref: lazy reference for recursive grammars
- Map / Omit / Build / WithIndices: value shaping
- Lookahead: zero-width `&` / `!` predicates
"""

from .base import Parser, WhitespaceAware, Pass, Fail, Cut, Attempt, Ref
from .sequence import Sequence
from .choice import Choice
from .many import Many
from .optional import Optional, Lookahead
from .transform import Map, Omit, Build, WithIndices, Located
