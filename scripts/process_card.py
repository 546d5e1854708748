"""
Card Processing CLI.

Runs a single photo through the OCR preparation pipeline and writes the
intermediate images, then optionally validates MRZ text read by an external
OCR engine.

Usage:
    # Normalize, binarize and crop all front-side fields
    python scripts/process_card.py --image front.jpg --output out/

    # Back side: MRZ band only, plus validation of the OCR'd lines
    python scripts/process_card.py --image back.jpg --back \\
        --mrz "I<TURA12C345672<<<<<<<<<<<<<<<" \\
              "9001158M3001019TUR123456789504" \\
              "YILMAZ<<AHMET<<<<<<<<<<<<<<<<<"

    # Pick the MRZ and any valid TCKN out of a raw OCR text dump
    python scripts/process_card.py --ocr-text ocr.txt
"""

import argparse
import json
import logging
import sys
from pathlib import Path

import cv2

# Add project root to path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.mrz import extract_mrz_lines_from_text, extract_valid_tckns, parse_td1  # noqa: E402
from src.pipeline import CardPipeline, blur_score, extract_region  # noqa: E402
from src.preprocessing.regions import get_side_fields  # noqa: E402
from src.utils.logging_config import setup_logging  # noqa: E402

logger = logging.getLogger(__name__)


def save_image(path: Path, image) -> None:
    if image is None:
        logger.warning(f"Nothing to write for {path.name}")
        return
    cv2.imwrite(str(path), image)
    logger.info(f"Wrote {path}")


def process_image(image_path: Path, output_dir: Path, is_back_side: bool) -> dict:
    """
    Process one photo and write its images to output_dir.

    Returns:
        JSON-serializable summary of the run.
    """
    frame = cv2.imread(str(image_path))
    if frame is None:
        raise FileNotFoundError(f"Could not read image: {image_path}")

    pipeline = CardPipeline()
    result = pipeline.process_for_ocr(frame)

    summary = {
        "image": str(image_path),
        "detected": result.detected,
        "confidence": round(result.confidence, 4),
        "glare_score": round(result.glare_score, 4),
        "width": result.width,
        "height": result.height,
    }

    if not result.detected:
        return summary

    output_dir.mkdir(parents=True, exist_ok=True)
    summary["blur_score"] = round(blur_score(result.normalized), 2)

    save_image(output_dir / "normalized.png", result.normalized)
    save_image(output_dir / "binarized.png", result.binarized)
    save_image(output_dir / "mrz.png", result.mrz_region)

    fields = get_side_fields(is_back_side)
    for field_type in fields:
        region = extract_region(result.normalized, field_type, is_back_side)
        save_image(output_dir / f"field_{field_type.name.lower()}.png", region)

    summary["fields"] = [f.name for f in fields]
    return summary


def mrz_summary(lines) -> dict:
    data = parse_td1(*lines)
    return {
        "total_score": data.validation.total_score,
        "checksum_valid": data.checksum_valid,
        "document_number": data.document_number,
        "birth_date": data.birth_date,
        "expiry_date": data.expiry_date,
        "date_of_birth": str(data.birth_date_parsed or ""),
        "date_of_expiry": str(data.expiry_date_parsed or ""),
        "sex": data.sex,
        "nationality": data.nationality,
        "tckn": data.tckn,
        "tckn_valid": data.tckn_valid,
        "surname": data.surname,
        "given_names": data.given_names,
    }


def read_ocr_text(path: Path) -> dict:
    """Select MRZ lines and valid TCKNs from an OCR text file."""
    text = path.read_text(encoding="utf-8")
    extraction = extract_mrz_lines_from_text(text)

    summary = {
        "mrz_lines": extraction.lines,
        "mrz_fallback": extraction.used_fallback,
        "structure_score": extraction.structure_score,
        "tckns": extract_valid_tckns(text),
    }
    if extraction.has_td1_lines:
        summary["mrz"] = mrz_summary(extraction.lines)
    return summary


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Prepare an ID card photo for OCR",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--image", type=str, help="Path to the card photo")
    parser.add_argument("--output", type=str, default="output", help="Output directory")
    parser.add_argument("--back", action="store_true", help="Photo shows the back side")
    parser.add_argument(
        "--mrz",
        nargs=3,
        metavar=("LINE1", "LINE2", "LINE3"),
        help="MRZ lines read by an OCR engine to validate",
    )
    parser.add_argument("--ocr-text", type=str, help="Text file with raw OCR output")
    parser.add_argument("--log-level", type=str, default="INFO", help="Logging level")
    args = parser.parse_args()

    setup_logging(args.log_level)

    if args.image is None and args.mrz is None and args.ocr_text is None:
        parser.error("at least one of --image, --mrz or --ocr-text is required")

    summary = {}

    if args.image is not None:
        try:
            summary["processing"] = process_image(
                Path(args.image), Path(args.output), args.back
            )
        except FileNotFoundError as e:
            logger.error(str(e))
            return 1

    if args.mrz is not None:
        summary["mrz"] = mrz_summary(args.mrz)

    if args.ocr_text is not None:
        try:
            summary["ocr_text"] = read_ocr_text(Path(args.ocr_text))
        except OSError as e:
            logger.error(f"Could not read OCR text: {e}")
            return 1

    print(json.dumps(summary, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
