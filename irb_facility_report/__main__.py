from irb_facility_report.cli import main

main()
