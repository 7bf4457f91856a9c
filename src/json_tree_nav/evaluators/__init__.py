"""Evaluators subpackage for json-tree-nav.

``JqEvaluator`` runs the ``jq`` executable.  Any object with a conformant
``evaluate`` method satisfies the ``Evaluator`` Protocol and can be passed to
``HybridResolver`` instead.
"""

from json_tree_nav.evaluators.jq import JqEvaluator

__all__ = ["JqEvaluator"]
