"""Loss, metric and training-loop helpers for teachnet."""
