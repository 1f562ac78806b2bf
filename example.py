"""
Example client for the text recognition service
"""
import base64
import json
import sys
from pathlib import Path

import requests


def recognize_image(
    image_path: str,
    api_url: str = "http://localhost:8000",
    config: dict = None
) -> dict:
    """
    Send an image to the service through the method channel

    Args:
        image_path: Path to the image
        api_url: Service URL
        config: Optional recognition config

    Returns:
        Response envelope
    """
    image_file = Path(image_path)

    if not image_file.exists():
        raise FileNotFoundError(f"Image not found: {image_path}")

    print(f"📸 Reading image: {image_path}")
    image_bytes = image_file.read_bytes()
    image_base64 = base64.b64encode(image_bytes).decode("utf-8")

    print(f"📦 Image size: {len(image_bytes) / 1024:.2f} KB")

    arguments = {"imageBytes": image_base64}
    method = "recognizeText"
    if config is not None:
        arguments["config"] = config
        method = "recognizeTextWithConfig"

    print(f"🚀 Calling {method} at {api_url}/api/v1/channel")
    response = requests.post(
        f"{api_url}/api/v1/channel",
        json={"method": method, "arguments": arguments},
        timeout=60
    )
    response.raise_for_status()
    envelope = response.json()

    if envelope["status"] != "success":
        error = envelope.get("error") or {}
        print(f"❌ {envelope['status']}: {error.get('code')} {error.get('message')}")
        return envelope

    result = envelope["result"]
    print("\n✅ Success!")
    print(f"⏱️  Processing time: {result['processingTimeMs']}ms")
    print(f"📊 Confidence: {result['confidence']:.2%}")
    print(f"🔧 Engine: {result['metadata'].get('platform')}")
    print(f"🌐 Language: {result.get('detectedLanguage') or 'unknown'}")
    print(f"🧱 Blocks: {result['metadata']['totalBlocks']}")
    print(f"\n📝 Text:\n{result['fullText']}")

    return envelope


def main():
    """Entry point"""
    if len(sys.argv) < 2:
        print("Usage: python example.py <path_to_image> [api_url] [quality_tier]")
        print("Example: python example.py page.png http://localhost:8000 fast")
        sys.exit(1)

    image_path = sys.argv[1]
    api_url = sys.argv[2] if len(sys.argv) > 2 else "http://localhost:8000"
    config = {"qualityTier": sys.argv[3]} if len(sys.argv) > 3 else None

    try:
        envelope = recognize_image(image_path, api_url, config)

        output_file = Path(image_path).stem + "_result.json"
        with open(output_file, "w", encoding="utf-8") as f:
            json.dump(envelope, f, indent=2, ensure_ascii=False)
        print(f"\n💾 Full response saved to: {output_file}")

    except FileNotFoundError as e:
        print(f"❌ Error: {e}")
        sys.exit(1)

    except requests.exceptions.ConnectionError:
        print(f"❌ Error: Cannot connect to the service at {api_url}")
        print("Make sure the service is running: python run.py")
        sys.exit(1)


if __name__ == "__main__":
    main()
