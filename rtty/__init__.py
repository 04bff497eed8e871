from .audio import RttyTransmitter, render_text
from .codec import BaudotCodec, CodecState, decode, encode_char
from .config import ConfigError, RttyConfig, load_config
from .driver import TransmissionDriver, TransmissionReport
from .sinks import (
    IAudioSink,
    MemorySink,
    PyAudioSink,
    RawStreamSink,
    SampleBuffer,
    SampleFormat,
    SinkError,
    SinkUnderrun,
    WavFileSink,
)
from .sources import ArgumentSource, FileSource, ITextSource, KeyboardSource, SourceError, StringSource
from .synth import Oscillator, OscillatorState, build_table

__all__ = [
    "ArgumentSource",
    "BaudotCodec",
    "CodecState",
    "ConfigError",
    "FileSource",
    "IAudioSink",
    "ITextSource",
    "KeyboardSource",
    "MemorySink",
    "Oscillator",
    "OscillatorState",
    "PyAudioSink",
    "RawStreamSink",
    "RttyConfig",
    "RttyTransmitter",
    "SampleBuffer",
    "SampleFormat",
    "SinkError",
    "SinkUnderrun",
    "SourceError",
    "StringSource",
    "TransmissionDriver",
    "TransmissionReport",
    "WavFileSink",
    "build_table",
    "decode",
    "encode_char",
    "load_config",
    "render_text",
]

__version__ = "0.1.0"
