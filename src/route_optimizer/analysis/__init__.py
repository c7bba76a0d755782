from .benchmark import BenchmarkRecord, random_instance, run_benchmark, summarize

__all__ = ['BenchmarkRecord', 'random_instance', 'run_benchmark', 'summarize']
