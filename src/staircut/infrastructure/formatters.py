"""Output formatters and exporters for optimization results."""

from __future__ import annotations

import json
from typing import Any

from staircut.application.dtos import OptimizationResult
from staircut.domain.value_objects import Piece
from staircut.infrastructure.bin_packing import PlacedPiece, PlankLayout


class OptimizationReportFormatter:
    """Formats an optimization result as a plain-text report.

    The report lists every plank bought (treads first), the number of
    planks per spec, run totals and, when some pieces could not be placed,
    a warning block naming them.
    """

    def __init__(self, include_placements: bool = False) -> None:
        """Initialize formatter.

        Args:
            include_placements: List the pieces placed on each plank.
        """
        self._include_placements = include_placements

    def format(self, result: OptimizationResult, title: str | None = None) -> str:
        """Format the full report."""
        sections = [
            self._format_header(title),
            self._format_layouts("TREAD PLANKS", result.tread_layouts),
            self._format_layouts("RISER PLANKS", result.riser_layouts),
            self._format_purchase(result),
            self._format_totals(result),
        ]
        if not result.all_pieces_fit:
            sections.append(self._format_unfit(result.unfit_pieces))
        return "\n\n".join(sections)

    def _format_header(self, title: str | None) -> str:
        lines = ["STAIRCASE CUTTING PLAN"]
        if title:
            lines.append(title)
        lines.append("=" * 70)
        return "\n".join(lines)

    def _format_layouts(self, heading: str, layouts: tuple[PlankLayout, ...]) -> str:
        if not layouts:
            return f"{heading}\n  (none)"

        lines = [
            heading,
            "-" * 70,
            f"{'Plank':<24} {'Instance':<16} {'Pieces':<8} {'Eff. %':<8} "
            f"{'Waste (m2)'}",
            "-" * 70,
        ]
        for layout in layouts:
            lines.append(
                f"{layout.plank_spec.display_name[:24]:<24} "
                f"{layout.instance_id[:16]:<16} {layout.piece_count:<8} "
                f"{layout.efficiency:<8.1f} {layout.waste_area / 1_000_000:.3f}"
            )
            if self._include_placements:
                for placement in layout.placements:
                    lines.append(f"    {self._format_placement(placement)}")
        return "\n".join(lines)

    def _format_placement(self, placement: PlacedPiece) -> str:
        piece = placement.piece
        return (
            f"{piece.id}: {piece.width:g} x {piece.height:g} mm "
            f"at ({placement.x:g}, {placement.y:g}), {placement.rotation} deg"
        )

    def _format_purchase(self, result: OptimizationResult) -> str:
        lines = ["PLANKS TO BUY", "-" * 70]
        # Tread and riser catalogs may reuse the same spec ids
        groups = (
            ("treads", result.tread_layouts),
            ("risers", result.riser_layouts),
        )
        for group, layouts in groups:
            specs = {layout.plank_spec.id: layout.plank_spec for layout in layouts}
            for spec_id, count in result.planks_used.get(group, {}).items():
                spec = specs[spec_id]
                lines.append(
                    f"{group[:-1].capitalize():<8} {spec.display_name[:30]:<30} "
                    f"{count:>3} x {spec.price_per_plank:>8.2f} = "
                    f"{count * spec.price_per_plank:>9.2f}"
                )
        if len(lines) == 2:
            lines.append("  (nothing)")
        return "\n".join(lines)

    def _format_totals(self, result: OptimizationResult) -> str:
        lines = [
            "TOTALS",
            "-" * 70,
            f"  Treads: {result.tread_stats.planks} planks, "
            f"{result.tread_stats.cost:.2f} EUR, "
            f"{result.tread_stats.efficiency:.1f}% efficiency",
            f"  Risers: {result.riser_stats.planks} planks, "
            f"{result.riser_stats.cost:.2f} EUR, "
            f"{result.riser_stats.efficiency:.1f}% efficiency",
            f"  Total planks: {result.total_planks}",
            f"  Total cost: {result.total_cost:.2f} EUR",
            f"  Total waste: {result.total_waste / 1_000_000:.3f} m2",
            f"  Overall efficiency: {result.overall_efficiency:.1f}%",
        ]
        return "\n".join(lines)

    def _format_unfit(self, pieces: tuple[Piece, ...]) -> str:
        lines = [f"WARNING: {len(pieces)} piece(s) could not be placed"]
        for piece in pieces:
            lines.append(
                f"  - {piece.id} (step {piece.step_number}): "
                f"{piece.width:g} x {piece.height:g} mm"
            )
        return "\n".join(lines)


class JsonExporter:
    """Exports optimization results as JSON.

    The document uses the same field names as the REST API response.
    """

    def export(self, result: OptimizationResult) -> str:
        """Export the result as a JSON string."""
        return json.dumps(self.to_dict(result), indent=2)

    def to_dict(self, result: OptimizationResult) -> dict[str, Any]:
        """Convert the result to JSON-compatible primitives."""
        return {
            "tread_layouts": [self._format_layout(lay) for lay in result.tread_layouts],
            "riser_layouts": [self._format_layout(lay) for lay in result.riser_layouts],
            "planks_used": {
                group: dict(counts) for group, counts in result.planks_used.items()
            },
            "total_planks": result.total_planks,
            "total_cost": result.total_cost,
            "total_waste": result.total_waste,
            "total_area": result.total_area,
            "overall_efficiency": result.overall_efficiency,
            "all_pieces_fit": result.all_pieces_fit,
            "unfit_pieces": [self._format_piece(p) for p in result.unfit_pieces],
            "tread_stats": {
                "planks": result.tread_stats.planks,
                "cost": result.tread_stats.cost,
                "efficiency": result.tread_stats.efficiency,
            },
            "riser_stats": {
                "planks": result.riser_stats.planks,
                "cost": result.riser_stats.cost,
                "efficiency": result.riser_stats.efficiency,
            },
            "optimized_at": result.optimized_at.isoformat(),
        }

    def _format_layout(self, layout: PlankLayout) -> dict[str, Any]:
        return {
            "plank_id": layout.plank_spec.id,
            "plank_name": layout.plank_spec.display_name,
            "instance_id": layout.instance_id,
            "plank_index": layout.plank_index,
            "price": layout.plank_spec.price_per_plank,
            "total_area": layout.total_area,
            "used_area": layout.used_area,
            "waste_area": layout.waste_area,
            "efficiency": layout.efficiency,
            "placements": [
                {
                    "piece": self._format_piece(p.piece),
                    "x": p.x,
                    "y": p.y,
                    "rotation": p.rotation,
                    "plank_id": p.plank_id,
                }
                for p in layout.placements
            ],
        }

    def _format_piece(self, piece: Piece) -> dict[str, Any]:
        return {
            "id": piece.id,
            "step_number": piece.step_number,
            "width": piece.width,
            "height": piece.height,
            "piece_type": piece.piece_type.value,
            "requires_nose": piece.requires_nose,
            "area": piece.area,
        }
