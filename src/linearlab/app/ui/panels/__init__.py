"""
Left-side control panels. Each one edits the shared Store and listens to its
signals; none of them talks to another panel directly.
"""
from linearlab.app.ui.panels.analysis import AnalysisPanel
from linearlab.app.ui.panels.operations import OperationsPanel
from linearlab.app.ui.panels.transform import TransformPanel

__all__ = ["AnalysisPanel", "OperationsPanel", "TransformPanel"]
