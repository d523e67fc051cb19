from .experiment import run_experiment

__all__ = ["run_experiment"]
