from .buffer import SampleBuffer, pack_samples
from .files import RawStreamSink, WavFileSink
from .interface import IAudioSink, SampleFormat, SinkError, SinkGeometry, SinkUnderrun
from .memory import MemorySink
from .pyaudio_sink import PyAudioSink

__all__ = [
    "IAudioSink",
    "MemorySink",
    "PyAudioSink",
    "RawStreamSink",
    "SampleBuffer",
    "SampleFormat",
    "SinkError",
    "SinkGeometry",
    "SinkUnderrun",
    "WavFileSink",
    "pack_samples",
]
