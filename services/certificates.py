"""
Clean inspection certificate PDF.

Text is laid over a scanned blank certificate at fixed page positions, so
the coordinates below match that form and nothing else.
"""

import logging
import os
from datetime import datetime

from reportlab.lib.pagesizes import letter
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

logger = logging.getLogger(__name__)

FONT = 'Helvetica'
FONT_SIZE = 10
SIGNATURE_SCALE = 0.45

# Certificate numbers that fit on the first line, and in total
FIRST_LINE_UNITS = 7
MAX_UNITS = 16


def format_list(items, final=True):
    """Join as "a, b & c"; with final=False as "a, b, c," so a second line can follow."""
    items = [str(item) for item in items if str(item)]
    if not items:
        return ''
    if not final:
        return ', '.join(items) + ','
    if len(items) == 1:
        return items[0]
    return f"{', '.join(items[:-1])} & {items[-1]}"


def create_clean_certificate(path, inspector_name, building, inspection_type, settings,
                             elevators=None, issued=None):
    """
    Draw a clean certificate for every elevator in a building.

    Args:
        path: Destination PDF; replaced if it exists
        inspector_name: Inspector who performed the inspection
        building: Building being certified
        inspection_type: InspectionType or its label; selects the Category 1 / 5 boxes
        settings: Certificate constants (Config.CERTIFICATE)
        elevators: Elevators to list; defaults to building.elevators()
        issued: Certificate date; defaults to now

    Raises:
        ValueError: More than 16 elevators
    """
    elevators = building.elevators() if elevators is None else list(elevators)
    if len(elevators) > MAX_UNITS:
        raise ValueError(f"Cannot create a properly formatted certificate with more than {MAX_UNITS} units.")

    issued = issued or datetime.now()
    inspection_type = str(inspection_type)
    unit_numbers = [elevator.nickname for elevator in elevators]
    certificate_numbers = [elevator.number for elevator in elevators]

    if os.path.exists(path):
        os.remove(path)

    pdf = canvas.Canvas(path, pagesize=letter)
    pdf.setFont(FONT, FONT_SIZE)

    template = settings.get('template_image')
    if template and os.path.exists(template):
        width, height = letter
        pdf.drawImage(template, 0, 0, width=width, height=height)

    # Header
    pdf.drawString(180, 713, settings['agency'])
    pdf.drawString(470, 713, issued.strftime('%B %d, %Y'))
    pdf.drawString(200, 690, settings['professional_in_charge'])
    pdf.drawString(500, 690, settings['professional_qei'])
    pdf.drawString(135, 667, inspector_name)
    pdf.drawString(500, 667, settings['inspector_qei'])

    # Units and certificate numbers
    pdf.drawString(90, 644, '#' + format_list(unit_numbers))
    if len(certificate_numbers) <= FIRST_LINE_UNITS:
        pdf.drawString(145, 621, format_list(certificate_numbers))
    else:
        pdf.drawString(145, 621, format_list(certificate_numbers[:FIRST_LINE_UNITS], final=False))
        pdf.drawString(45, 598, format_list(certificate_numbers[FIRST_LINE_UNITS:]))

    # Project
    pdf.drawString(125, 575, building.formatted_address)
    pdf.drawString(160, 552, building.name)

    # Discipline, and periodic is always checked
    pdf.drawString(195, 529, 'X')
    pdf.drawString(195, 505, 'X')
    if 'Category 1' in inspection_type:
        pdf.drawString(375, 505, 'X')
    if 'Category 5' in inspection_type:
        pdf.drawString(375, 493, 'X')

    # Certification box
    pdf.drawString(100, 410, settings['professional_in_charge'])
    pdf.drawString(90, 371, settings['agency'])
    pdf.drawString(105, 269, settings['code_year'])

    signature = settings.get('signature_image')
    if signature and os.path.exists(signature):
        image = ImageReader(signature)
        width, height = image.getSize()
        pdf.drawImage(image, 105, 172, width=width * SIGNATURE_SCALE, height=height * SIGNATURE_SCALE, mask='auto')

    pdf.showPage()
    pdf.save()
    logger.info(f"Certificate for {building.formatted_address} written to {path}")
    return path
