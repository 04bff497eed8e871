from __future__ import annotations

from typing import Any, Optional
import importlib
import logging

from .interface import SampleFormat, SinkError, SinkGeometry, SinkUnderrun


class PyAudioSink:
    """
    Sound card output through PyAudio (PortAudio).

    Writes are blocking. An output underflow reported by PortAudio is
    surfaced as SinkUnderrun; every other stream error is fatal.
    """

    def __init__(self, device: Optional[str] = None) -> None:
        """
        Args:
            device: None or "default" for the host default output, an integer
                index, or a substring of the device name.
        """
        self.device = device
        self.pa: Any = None
        self.stream: Any = None
        self.geometry: Optional[SinkGeometry] = None
        self.logger = logging.getLogger(__name__)
        self._pyaudio: Any = None
        self._device_index: Optional[int] = None

    def open(self) -> None:
        try:
            self._pyaudio = importlib.import_module("pyaudio")
        except ImportError as exc:
            raise SinkError(
                "PyAudio is required for sound card output; install the 'audio' extra"
            ) from exc
        self.pa = self._pyaudio.PyAudio()
        try:
            self._device_index = self._resolve_device(self.device)
        except SinkError:
            self.close()
            raise

    def negotiate(self, sample_rate: int, channels: int, sample_format: SampleFormat,
                  buffer_time_us: int, period_time_us: int) -> SinkGeometry:
        if self.pa is None:
            raise SinkError("sink is not open")
        requested = SinkGeometry.for_stream(
            sample_rate, channels, sample_format, buffer_time_us, period_time_us)
        pa_format = self._pyaudio.paUInt8 if sample_format is SampleFormat.U8 else self._pyaudio.paInt16
        # a renegotiation replaces the stream
        self._close_stream()

        try:
            self.stream = self.pa.open(
                format=pa_format,
                channels=channels,
                rate=sample_rate,
                output=True,
                output_device_index=self._device_index,
                frames_per_buffer=requested.period_frames,
            )
        except (OSError, ValueError) as e:
            self.logger.error(f"Failed to open audio stream: {e}")
            self.close()
            raise SinkError(f"cannot open output stream at {sample_rate}Hz: {e}") from e

        # what the device can hold when idle is the most it will ever queue
        capacity = max(int(self.stream.get_write_available()), requested.period_frames)
        self.geometry = SinkGeometry(
            frame_size=requested.frame_size,
            period_frames=requested.period_frames,
            buffer_frames=capacity,
        )
        self.logger.info(
            f"PyAudioSink opened: {sample_rate}Hz, {sample_format.name}, "
            f"{requested.period_frames} frames/period, {capacity} frames buffered"
        )
        return self.geometry

    def write(self, data: bytes) -> int:
        if self.stream is None or self.geometry is None:
            raise SinkError("stream is not open")
        try:
            if not self.stream.is_active():
                # stopped by drain() at the end of the previous run
                self.stream.start_stream()
            self.stream.write(data, exception_on_underflow=True)
        except IOError as e:
            if self._pyaudio.paOutputUnderflowed in e.args:
                self.logger.warning(f"Audio write underflow: {e}")
                raise SinkUnderrun(str(e)) from e
            raise SinkError(f"audio write failed: {e}") from e
        return len(data) // self.geometry.frame_size

    def available_headroom(self) -> int:
        if self.stream is None:
            return 0
        return int(self.stream.get_write_available())

    def recover(self) -> None:
        if self.stream is not None and not self.stream.is_active():
            self.stream.start_stream()

    def drain(self) -> None:
        # Pa_StopStream returns once the queued buffers have played
        if self.stream is not None and self.stream.is_active():
            self.stream.stop_stream()

    def close(self) -> None:
        self._close_stream()

        if self.pa:
            self.pa.terminate()
            self.pa = None

    def _close_stream(self) -> None:
        if self.stream:
            if self.stream.is_active():
                self.stream.stop_stream()
            self.stream.close()
            self.stream = None

    def _resolve_device(self, device: Optional[str]) -> Optional[int]:
        if device is None or device == "default":
            return None
        if device.isdigit():
            return int(device)
        for index in range(self.pa.get_device_count()):
            info = self.pa.get_device_info_by_index(index)
            if info.get("maxOutputChannels", 0) > 0 and device in str(info.get("name", "")):
                return index
        raise SinkError(f"no output device matching {device!r}")


__all__ = ["PyAudioSink"]
