from .effect_executor import EffectExecutor, ImagePicker
from .output_sink import FileOutputSink, OutputSink, capture_filename

__all__ = ["EffectExecutor", "ImagePicker", "FileOutputSink", "OutputSink", "capture_filename"]
