"""
Prop DNA: fixed descriptions of recurring props.

Downstream prompts repeat these lines verbatim so the same object, tool
and vehicle look identical in every scene.
"""

from dataclasses import dataclass

from storytram.storyteller.triads import Props


@dataclass(frozen=True)
class PropDNA:
    object_dna: str
    tool_dna: str
    vehicle_dna: str

    def lines(self) -> list[str]:
        return [self.object_dna, self.tool_dna, self.vehicle_dna]


def build_prop_dna(props: Props) -> PropDNA:
    if props.object:
        object_dna = f"OBJECT DNA: {props.object}; same size, color, texture in every scene"
    else:
        object_dna = "OBJECT DNA: none"

    if props.tools:
        tool_dna = f"TOOL DNA: toy-scale {', '.join(props.tools)}; natural materials, consistent shape in every scene"
    else:
        tool_dna = "TOOL DNA: none"

    if props.vehicle:
        vehicle_dna = f"VEHICLE DNA: toy-scale {props.vehicle}; four small wheels, realistic rolling, no logos"
    else:
        vehicle_dna = "VEHICLE DNA: none"

    return PropDNA(object_dna=object_dna, tool_dna=tool_dna, vehicle_dna=vehicle_dna)
