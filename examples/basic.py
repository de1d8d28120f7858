#!/usr/bin/env python3
"""
Stream encoded audio from stdin to VIDEO.TAXI and print the events that come back.

Usage:
    ffmpeg -f alsa -i default -ac 2 -f adts - | VIDEOTAXI_TOKEN=<token> python basic.py

VIDEOTAXI_URL optionally overrides the control-plane endpoint.
"""

import argparse
import asyncio
import sys

from videotaxi import (
  AudioSender,
  EventReceiver,
  SessionConfig,
  SpeechApiError,
  VideoTaxiClient,
)
from videotaxi.common import Milliseconds, Range, setup_logging_from_env
from videotaxi.wire import (
  EndOfStreamEvent,
  PartialEvent,
  TranscriptEvent,
  TranslationEvent,
  VoiceEvent,
)

CHUNK_SIZE = 4096


async def pump_stdin(sender: AudioSender) -> None:
  """Forward stdin to the master socket until EOF."""
  loop = asyncio.get_running_loop()
  reader = asyncio.StreamReader()
  await loop.connect_read_pipe(lambda: asyncio.StreamReaderProtocol(reader), sys.stdin.buffer)

  while chunk := await reader.read(CHUNK_SIZE):
    await sender.send_audio(chunk)


async def print_events(receiver: EventReceiver) -> None:
  async for event in receiver:
    match event:
      case PartialEvent(payload=p):
        print(f"… {p.text}")
      case TranscriptEvent(payload=p):
        span = Range(Milliseconds(p.from_ms), Milliseconds(p.to_ms))
        print(f"[{p.speaker}] {p.text} ({span})")
      case TranslationEvent(payload=p):
        print(f"[{p.speaker}] → {p.text}")
      case VoiceEvent(payload=p):
        print(f"♪ voice #{p.seq} for {p.sentence_id}")
      case EndOfStreamEvent(payload=p):
        print(f"End of stream: {p.reason}")
        return
      case _:
        print(f"Received event: {event.kind}")

  if receiver.error:
    print(f"Event stream failed: {receiver.error}")


async def run(config: SessionConfig) -> int:
  client = VideoTaxiClient.from_env()

  session = await client.create_session(config)
  print(f"Session {session.session_id}")
  if session.viewer_web_url:
    print(f"  Watch at {session.viewer_web_url}")

  async with (
    await client.connect_audio_sender(session) as sender,
    await client.connect_event_receiver(session) as receiver,
  ):
    audio_task = asyncio.create_task(pump_stdin(sender))
    event_task = asyncio.create_task(print_events(receiver))

    done, pending = await asyncio.wait(
      [audio_task, event_task], return_when=asyncio.FIRST_COMPLETED
    )
    print("Audio task completed" if audio_task in done else "Event task completed")

    for task in pending:
      task.cancel()
    await asyncio.gather(*pending, return_exceptions=True)

    for task in done:
      if task.exception():
        print(f"❌ Error: {task.exception()}")
        return 1

  return 0


def main() -> int:
  parser = argparse.ArgumentParser(description="Stream stdin audio to VIDEO.TAXI")
  parser.add_argument("--name", default="My Python Session", help="Session display name")
  parser.add_argument("--master-language", default="de", help="Spoken language (default: de)")
  parser.add_argument(
    "--viewer-language", default="en-US", help="Language of received events (default: en-US)"
  )
  parser.add_argument(
    "--translate",
    nargs="+",
    default=["en-US", "nb"],
    help="Translation languages (default: en-US nb)",
  )
  parser.add_argument("--no-voiceover", action="store_true", help="Disable voiceover")
  args = parser.parse_args()

  setup_logging_from_env()

  config = SessionConfig(
    session_name=args.name,
    translation_languages=tuple(args.translate),
    master_language=args.master_language,
    viewer_language=args.viewer_language,
    enable_voiceover=not args.no_voiceover,
  )

  try:
    return asyncio.run(run(config))
  except SpeechApiError as e:
    print(f"❌ Error: {e}")
    return 1
  except KeyboardInterrupt:
    print("\nShutting down...")
    return 0


if __name__ == "__main__":
  sys.exit(main())
