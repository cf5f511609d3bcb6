"""
Validation rule definitions.

Each rule has:
- Code: Unique identifier (e.g., "TREE-001")
- Severity: FAIL, WARN, or INFO
- Message template: Human-readable description
- Remediation: Suggested fix

Rules are organized by category:
- TREE: Partition structure
- ROOM: Room carving and aggregation
- CONN: Corridor connectivity
"""

from dataclasses import dataclass
from typing import Optional

from .core import Severity, ValidationIssue


@dataclass(frozen=True)
class ValidationRule:
    """Definition of a validation rule."""
    code: str
    severity: Severity
    message_template: str
    remediation_template: Optional[str] = None
    description: Optional[str] = None

    def format_message(self, **kwargs) -> str:
        return self.message_template.format(**kwargs)

    def format_remediation(self, **kwargs) -> Optional[str]:
        if self.remediation_template:
            return self.remediation_template.format(**kwargs)
        return None

    def issue(self, node_id: Optional[int] = None, **kwargs) -> ValidationIssue:
        """Build an issue for this rule"""
        return ValidationIssue(
            severity=self.severity,
            code=self.code,
            message=self.format_message(**kwargs),
            remediation=self.format_remediation(**kwargs),
            node_id=node_id,
        )


# =============================================================================
# PARTITION RULES (TREE)
# =============================================================================

TREE_001 = ValidationRule(
    code="TREE-001",
    severity=Severity.FAIL,
    message_template="Child cells do not tile the parent cell: {detail}",
    remediation_template="Children must be the two halves of the parent along its split axis",
    description="Sibling cells are disjoint and their union is the parent cell"
)

TREE_002 = ValidationRule(
    code="TREE-002",
    severity=Severity.FAIL,
    message_template="Leaf cell fails the validity predicate (volume={volume:.3f}, ratio={ratio:.3f})",
    remediation_template="Only accept splits whose halves pass the split policy",
    description="Every non-root leaf cell satisfies the minimum volume and aspect ratio band"
)

# =============================================================================
# ROOM RULES (ROOM)
# =============================================================================

ROOM_001 = ValidationRule(
    code="ROOM-001",
    severity=Severity.FAIL,
    message_template="Room {room} escapes its cell {cell}",
    remediation_template="Carve rooms strictly inside the leaf cell",
    description="A node's room bound lies inside its cell"
)

ROOM_002 = ValidationRule(
    code="ROOM-002",
    severity=Severity.FAIL,
    message_template="Room extent {room_extent:.3f} on {axis} is below {required:.3f}",
    remediation_template="Raise the minimum room coverage or enlarge leaf cells",
    description="Leaf rooms cover at least half the cell extent on X and Z"
)

ROOM_003 = ValidationRule(
    code="ROOM-003",
    severity=Severity.FAIL,
    message_template="Room bound {room} differs from the union of child rooms {expected}",
    remediation_template="Re-run bounds aggregation after rooms are generated",
    description="Internal room bounds are exactly the union of their children's bounds"
)

ROOM_004 = ValidationRule(
    code="ROOM-004",
    severity=Severity.FAIL,
    message_template="Node has no room bound",
    remediation_template="Generate rooms and aggregate bounds before connecting",
    description="Every node has a room bound after aggregation"
)

# =============================================================================
# CONNECTIVITY RULES (CONN)
# =============================================================================

CONN_001 = ValidationRule(
    code="CONN-001",
    severity=Severity.FAIL,
    message_template="Internal node is not connected (state={state})",
    remediation_template="Run the connectivity solver to its fixed point",
    description="Every internal node is connected once generation finishes"
)

CONN_002 = ValidationRule(
    code="CONN-002",
    severity=Severity.WARN,
    message_template="Expected {expected} corridor(s), found {found}",
    remediation_template="Each internal node should own exactly one corridor",
    description="Corridor count equals internal node count"
)
