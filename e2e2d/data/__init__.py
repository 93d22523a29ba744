from .recording import Recording, Step, StepKind

__all__ = ["Step", "StepKind", "Recording"]
