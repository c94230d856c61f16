# cartoon_creator/services/video/assembler.py

from __future__ import annotations

import base64
import binascii
import logging
import math
import os
import subprocess
import tempfile
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

import requests

from cartoon_creator.core.config import settings
from cartoon_creator.services.errors import AssemblyError
from cartoon_creator.services.video import frames

logger = logging.getLogger(__name__)

DEFAULT_SCENE_SECONDS = 5
TITLE_CARD_SECONDS = 5
AUDIO_SAMPLE_RATE = 44100

MIME_TYPES = {
    "mp4": "video/mp4",
    "gif": "image/gif",
}


@dataclass
class SceneClip:
    scene_number: int
    duration: int
    audio: Optional[bytes] = None

    @property
    def has_audio(self) -> bool:
        return bool(self.audio)


@dataclass
class AssembledVideo:
    data: bytes
    mime_type: str
    extension: str
    # "scenes", "title_card" or "placeholder"
    strategy: str


def build_concat_script(entries: Sequence[Tuple[str, float]]) -> str:
    """ffmpeg concat-demuxer script showing each file for its duration.

    The demuxer ignores the duration of the final entry unless the file is
    listed once more, so the last file is repeated.
    """
    if not entries:
        raise AssemblyError("No frames to concatenate")

    lines = []
    for filename, duration in entries:
        lines.append(f"file '{filename}'")
        lines.append(f"duration {duration}")
    lines.append(f"file '{entries[-1][0]}'")
    return "\n".join(lines) + "\n"


def decode_data_url(url: str) -> Optional[bytes]:
    _, _, payload = url.partition(",")
    try:
        return base64.b64decode(payload) or None
    except (binascii.Error, ValueError) as e:
        logger.warning("[Export] Could not decode audio data URL: %s", e)
        return None


def fetch_audio(url: str) -> Optional[bytes]:
    """Audio bytes for a scene's audio_url, or None when it cannot be read."""
    if url.startswith("data:"):
        return decode_data_url(url)

    if url.startswith(("http://", "https://")):
        try:
            resp = requests.get(url, timeout=settings.HTTP_TIMEOUT_SECONDS)
        except requests.RequestException as e:
            logger.warning("[Export] Audio fetch failed for %s: %s", url, e)
            return None
        if resp.status_code != 200:
            logger.warning("[Export] Audio fetch returned %s for %s", resp.status_code, url)
            return None
        return resp.content or None

    # blob: URLs and anything else only exist in the browser that made them
    logger.warning("[Export] Unsupported audio URL scheme: %s", url[:30])
    return None


class SceneVideoAssembler:
    """
    Turn a project's scenes into one downloadable video.

    The full render draws one frame per scene and stitches them with ffmpeg,
    laying each scene's narration over its frame. If that fails a 5 second
    title card is rendered instead, and if even that fails a static PNG card
    is returned.
    """

    def __init__(
        self,
        ffmpeg_binary: Optional[str] = None,
        ffprobe_binary: Optional[str] = None,
        load_image: Optional[frames.ImageLoader] = None,
        load_audio: Optional[Callable[[str], Optional[bytes]]] = None,
    ):
        self.ffmpeg_binary = ffmpeg_binary or settings.FFMPEG_BINARY
        self.ffprobe_binary = ffprobe_binary or settings.FFPROBE_BINARY
        self.load_image = load_image or frames.fetch_image
        self.load_audio = load_audio or fetch_audio

    def assemble(self, scenes: Sequence, project_title: str, output_format: str = "mp4") -> AssembledVideo:
        logger.info("[Export] Assembling %d scenes for %r as %s", len(scenes), project_title, output_format)

        try:
            return self.render_scenes(scenes, output_format)
        except Exception as e:
            logger.error("[Export] Scene render failed, falling back to title card: %s", e)

        try:
            return self.render_title_card_video(scenes, project_title)
        except Exception as e:
            logger.error("[Export] Title card render failed, returning placeholder: %s", e)

        return self.render_placeholder(scenes, project_title)

    # ------------------------------------------------------------------
    # Scene timeline
    # ------------------------------------------------------------------

    def prepare_clips(self, scenes: Sequence) -> List[SceneClip]:
        clips = []
        for scene in scenes:
            duration = scene.duration or DEFAULT_SCENE_SECONDS
            audio = None

            if scene.audio_url:
                audio = self.load_audio(scene.audio_url)
                if audio:
                    audio_seconds = self.probe_duration(audio)
                    if audio_seconds and audio_seconds > duration:
                        duration = math.ceil(audio_seconds)
                    logger.info(
                        "[Export] Scene %s audio: %s seconds, scene: %s seconds",
                        scene.scene_number, audio_seconds, duration,
                    )

            clips.append(SceneClip(scene_number=scene.scene_number, duration=max(1, int(duration)), audio=audio))
        return clips

    def render_frames(self, scenes: Sequence) -> List[bytes]:
        rendered = []
        for scene in scenes:
            try:
                rendered.append(frames.render_scene_frame(scene, self.load_image))
            except Exception as e:
                logger.warning("[Export] Frame for scene %s failed, using placeholder: %s", scene.scene_number, e)
                rendered.append(frames.render_placeholder_frame(scene.scene_number))
        return rendered

    def render_scenes(self, scenes: Sequence, output_format: str = "mp4") -> AssembledVideo:
        if not scenes:
            raise AssemblyError("No scenes to export")
        if output_format not in MIME_TYPES:
            raise AssemblyError(f"Unsupported export format: {output_format}")

        clips = self.prepare_clips(scenes)
        images = self.render_frames(scenes)

        with tempfile.TemporaryDirectory(prefix="cartoon_export_") as workdir:
            entries = []
            for i, (image, clip) in enumerate(zip(images, clips)):
                name = f"frame{i:04d}.png"
                _write(workdir, name, image)
                entries.append((name, clip.duration))
            _write(workdir, "frames.txt", build_concat_script(entries).encode())

            output = f"output.{output_format}"
            video_input = ["-f", "concat", "-safe", "0", "-i", "frames.txt"]

            if output_format == "gif":
                args = video_input + ["-vf", "fps=10,scale=640:-1:flags=lanczos", output]
            elif any(c.has_audio for c in clips):
                self._build_audio_track(workdir, clips)
                args = video_input + [
                    "-f", "concat", "-safe", "0", "-i", "audio.txt",
                    "-map", "0:v", "-map", "1:a",
                    "-vf", "fps=30,format=yuv420p",
                    "-c:v", "libx264", "-preset", "medium", "-crf", "23",
                    "-c:a", "aac", "-b:a", "128k",
                    "-shortest", "-movflags", "+faststart",
                    output,
                ]
            else:
                args = video_input + [
                    "-vf", "fps=30,format=yuv420p",
                    "-c:v", "libx264", "-preset", "medium", "-crf", "23",
                    "-movflags", "+faststart",
                    output,
                ]

            self._run_ffmpeg(args, workdir)
            data = _read(workdir, output)

        logger.info("[Export] Scene video ready (%d bytes)", len(data))
        return AssembledVideo(
            data=data, mime_type=MIME_TYPES[output_format], extension=f".{output_format}", strategy="scenes"
        )

    def _build_audio_track(self, workdir: str, clips: Sequence[SceneClip]) -> None:
        """One WAV segment per scene, padded or silent to the scene's length."""
        segments = []
        for i, clip in enumerate(clips):
            segment = f"segment{i:04d}.wav"
            if clip.has_audio:
                source = f"audio{i:04d}"
                _write(workdir, source, clip.audio)
                args = ["-i", source, "-af", "apad", "-t", str(clip.duration)]
            else:
                args = [
                    "-f", "lavfi",
                    "-i", f"anullsrc=channel_layout=stereo:sample_rate={AUDIO_SAMPLE_RATE}",
                    "-t", str(clip.duration),
                ]
            self._run_ffmpeg(args + ["-ar", str(AUDIO_SAMPLE_RATE), "-ac", "2", segment], workdir)
            segments.append(f"file '{segment}'")

        _write(workdir, "audio.txt", ("\n".join(segments) + "\n").encode())

    # ------------------------------------------------------------------
    # Fallbacks
    # ------------------------------------------------------------------

    def render_title_card_video(self, scenes: Sequence, project_title: str) -> AssembledVideo:
        audio_scenes = [s for s in scenes if s.audio_url]
        image = frames.render_title_card(project_title, len(scenes), len(audio_scenes))

        audio = None
        if audio_scenes:
            audio = self.load_audio(audio_scenes[0].audio_url)

        with tempfile.TemporaryDirectory(prefix="cartoon_title_") as workdir:
            _write(workdir, "title.png", image)
            args = ["-loop", "1", "-i", "title.png"]
            if audio:
                _write(workdir, "audio", audio)
                args += ["-i", "audio"]

            args += [
                "-t", str(TITLE_CARD_SECONDS),
                "-vf", "fps=30,format=yuv420p",
                "-c:v", "libx264", "-preset", "ultrafast",
            ]
            args += ["-c:a", "aac", "-b:a", "128k", "-shortest"] if audio else ["-an"]
            args.append("output.mp4")

            self._run_ffmpeg(args, workdir)
            data = _read(workdir, "output.mp4")

        return AssembledVideo(data=data, mime_type="video/mp4", extension=".mp4", strategy="title_card")

    def render_placeholder(self, scenes: Sequence, project_title: str) -> AssembledVideo:
        data = frames.render_export_card(project_title, len(scenes))
        return AssembledVideo(data=data, mime_type="image/png", extension=".png", strategy="placeholder")

    # ------------------------------------------------------------------
    # ffmpeg / ffprobe
    # ------------------------------------------------------------------

    def probe_duration(self, audio: bytes) -> Optional[float]:
        """Length of an audio clip in seconds, or None if ffprobe can't tell."""
        with tempfile.NamedTemporaryFile(suffix=".audio") as fh:
            fh.write(audio)
            fh.flush()
            try:
                result = subprocess.run(
                    [
                        self.ffprobe_binary,
                        "-v", "error",
                        "-show_entries", "format=duration",
                        "-of", "default=noprint_wrappers=1:nokey=1",
                        fh.name,
                    ],
                    capture_output=True,
                    text=True,
                )
            except OSError as e:
                logger.warning("[Export] ffprobe unavailable: %s", e)
                return None

        if result.returncode != 0:
            logger.warning("[Export] ffprobe failed: %s", result.stderr.strip())
            return None

        try:
            return float(result.stdout.strip())
        except ValueError:
            return None

    def _run_ffmpeg(self, args: List[str], workdir: str) -> None:
        cmd = [self.ffmpeg_binary, "-y", "-loglevel", "error"] + args
        logger.debug("[Export] Running %s", " ".join(cmd))
        result = subprocess.run(cmd, cwd=workdir, capture_output=True, text=True)
        if result.returncode != 0:
            raise AssemblyError(
                f"ffmpeg exited with status {result.returncode}",
                details=result.stderr.strip()[-2000:],
            )


def _write(workdir: str, name: str, data: bytes) -> None:
    with open(os.path.join(workdir, name), "wb") as fh:
        fh.write(data)


def _read(workdir: str, name: str) -> bytes:
    with open(os.path.join(workdir, name), "rb") as fh:
        return fh.read()
