"""
Import test suite: the public API is exported from the package and its
subpackages.
"""


class TestTopLevelImports:
    """Test top-level package imports."""

    def test_import_rtty(self):
        """Test basic rtty package import."""
        import rtty
        assert rtty.__version__ is not None

    def test_rtty_exports_core_classes(self):
        """Test that rtty exports core classes."""
        from rtty import (
            BaudotCodec,
            Oscillator,
            RttyConfig,
            RttyTransmitter,
            SampleBuffer,
            TransmissionDriver,
        )
        assert BaudotCodec is not None
        assert Oscillator is not None
        assert RttyConfig is not None
        assert RttyTransmitter is not None
        assert SampleBuffer is not None
        assert TransmissionDriver is not None

    def test_rtty_exports_sinks(self):
        """Test that rtty exports sinks satisfying IAudioSink."""
        from rtty import IAudioSink, MemorySink, PyAudioSink, RawStreamSink, WavFileSink
        for sink in (MemorySink(), RawStreamSink(), WavFileSink("x.wav"), PyAudioSink()):
            assert isinstance(sink, IAudioSink)


class TestSubpackageImports:
    """Test subpackage imports."""

    def test_codec(self):
        """Test codec tables."""
        from rtty.codec import BAUDOT_BITS, BITS_PER_SYMBOL
        assert len(BAUDOT_BITS) == 34
        assert BITS_PER_SYMBOL == 8

    def test_synth(self):
        """Test synth exports."""
        from rtty.synth import AMPLITUDE_MAX, OscillatorState
        assert AMPLITUDE_MAX == 32767
        assert OscillatorState() is not None

    def test_sources(self):
        """Test source classes."""
        from rtty.sources import ArgumentSource, FileSource, KeyboardSource, StringSource
        assert ArgumentSource is not None
        assert FileSource is not None
        assert KeyboardSource is not None
        assert StringSource is not None

    def test_pyaudio_is_optional(self):
        """Test the PyAudio sink imports without pyaudio installed."""
        # the sink imports pyaudio lazily in open()
        import rtty.sinks.pyaudio_sink
        assert rtty.sinks.pyaudio_sink.PyAudioSink is not None
