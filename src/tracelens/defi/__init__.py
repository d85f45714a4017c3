from tracelens.defi.detector import DefiDetector
from tracelens.defi.registry import AnalyzerRegistry, build_default_registry

__all__ = ["AnalyzerRegistry", "DefiDetector", "build_default_registry"]
