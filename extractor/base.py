from abc import ABC, abstractmethod
from typing import Dict, List

from datamodels import MethodDoc, ShapeField
from .source_unit import SourceUnit


class MethodDocExtractor(ABC):
    @property
    @abstractmethod
    def suffix(self) -> list[str]:
        """File suffixes handled (e.g., '.ts')"""
        pass

    @abstractmethod
    def extract_method_docs(self, unit: SourceUnit, shapes: Dict[str, List[ShapeField]]) -> list[MethodDoc]:
        """Extract one record per documented method of a single module"""
        pass
