"""
Feedback Classifier Interface.
Abstracts the external language-model capability that turns raw feedback
text into categorized themes.
"""
from abc import ABC, abstractmethod

from app.schemas.report import ClassificationResult


class IFeedbackClassifier(ABC):
    """
    Interface for classification providers.

    Usage:
        classifier: IFeedbackClassifier = OpenAIService()
        result = classifier.classify("The app crashes when I export")
    """

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Get the current model name."""
        pass

    @abstractmethod
    def classify(self, text: str) -> ClassificationResult:
        """
        Group feedback into themes.

        Args:
            text: Raw submitted feedback

        Returns:
            Validated ClassificationResult

        Raises:
            ClassificationError: On upstream failure, unparsable body or unexpected shape
        """
        pass
